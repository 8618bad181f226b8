from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List

from .schemas import ScenarioKind

logger = logging.getLogger(__name__)

INPUTS_FILE = ".rentobuy_inputs.json"
PROFILES_DIR = ".rentobuy_profiles"


@dataclass
class InputStore:
    """Last-used field values and named profiles, stored as JSON under ``state_dir``.

    Values are kept per scenario kind because the two forms share keys with
    different meanings (``purchase_price`` is the original basis when keeping).
    """

    state_dir: Path

    @property
    def inputs_path(self) -> Path:
        return self.state_dir / INPUTS_FILE

    @property
    def profiles_dir(self) -> Path:
        return self.state_dir / PROFILES_DIR

    def load_inputs(self, kind: ScenarioKind) -> Dict[str, str]:
        return _as_inputs(_read_json(self.inputs_path).get(kind.value, {}))

    def save_inputs(self, kind: ScenarioKind, inputs: Dict[str, str]) -> None:
        payload = _read_json(self.inputs_path)
        payload[kind.value] = dict(inputs)
        _write_json(self.inputs_path, payload)

    def list_profiles(self) -> List[str]:
        if not self.profiles_dir.is_dir():
            return []
        return sorted(path.stem for path in self.profiles_dir.glob("*.json"))

    def load_profile(self, name: str, kind: ScenarioKind) -> Dict[str, str]:
        path = self._profile_path(name)
        if not path.exists():
            raise FileNotFoundError(f"No profile named '{name}' in {self.profiles_dir}")
        return _as_inputs(_read_json(path).get(kind.value, {}))

    def save_profile(self, name: str, kind: ScenarioKind, inputs: Dict[str, str]) -> Path:
        path = self._profile_path(name)
        payload = _read_json(path)
        payload[kind.value] = dict(inputs)
        _write_json(path, payload)
        return path

    def _profile_path(self, name: str) -> Path:
        clean = name.strip()
        if not clean or "/" in clean or "\\" in clean or clean.startswith("."):
            raise ValueError(f"Invalid profile name '{name}'")
        return self.profiles_dir / f"{clean}.json"


def _read_json(path: Path) -> Dict[str, Dict[str, str]]:
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except FileNotFoundError:
        return {}
    except (OSError, ValueError) as exc:
        logger.warning("Ignoring unreadable inputs file %s: %s", path, exc)
        return {}
    if not isinstance(data, dict):
        logger.warning("Ignoring malformed inputs file %s", path)
        return {}
    return data


def _write_json(path: Path, payload: Dict[str, Dict[str, str]]) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(payload, indent=2, sort_keys=True), encoding="utf-8")
    logger.debug("Saved inputs to %s", path)


def _as_inputs(section: object) -> Dict[str, str]:
    if not isinstance(section, dict):
        return {}
    return {str(key): str(value) for key, value in section.items()}
