from __future__ import annotations

from pathlib import Path
from typing import Any, List
from pydantic import BaseModel, ConfigDict, ValidationError
import json
import yaml

from regex_parser.errors import DefinitionError
from regex_parser.models import ParserDefinition


class DefinitionStore(BaseModel):
    base_dirs: List[Path]

    model_config = ConfigDict(arbitrary_types_allowed=True)

    def load_all(self) -> List[ParserDefinition]:
        defs: List[ParserDefinition] = []
        for base in self.base_dirs:
            if not base.exists():
                continue
            for pattern in ("*.yml", "*.yaml", "*.json"):
                for p in sorted(base.rglob(pattern)):
                    defs.extend(self.load_file(p))
        return defs

    def get(self, name: str) -> ParserDefinition:
        for definition in self.load_all():
            if definition.name == name:
                return definition
        raise DefinitionError(f"No parser definition named '{name}'")

    @staticmethod
    def load_file(path: Path) -> List[ParserDefinition]:
        """Read one file holding a definition or a list of definitions."""
        try:
            text = path.read_text()
            raw: Any = json.loads(text) if path.suffix == ".json" else yaml.safe_load(text)
        except (OSError, ValueError, yaml.YAMLError) as err:
            raise DefinitionError(str(err), path) from err

        items = raw if isinstance(raw, list) else [raw]
        try:
            return [ParserDefinition.model_validate(item) for item in items]
        except ValidationError as err:
            raise DefinitionError(str(err), path) from err
