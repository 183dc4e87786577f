"""Parser plugin modules. Each exposes a ``module_info`` picked up by discovery."""
