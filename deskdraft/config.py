"""
Export options.

Read from an optional YAML file, e.g.

    units: mm          # mm | in | unitless
    spacing: 50        # gap between outlines
    label_height: 20
    layers:
      CUT: OUTLINE
"""
from __future__ import annotations
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Optional

import yaml

UNITS = ("mm", "in", "unitless")


@dataclass
class ExportOptions:
    units: str = "mm"
    spacing: float = 50.0
    label_height: float = 20.0
    layers: Dict[str, str] = field(default_factory=dict)

    def layer(self, name: str) -> str:
        return self.layers.get(name, name)


def load_options(path: Optional[Path] = None) -> ExportOptions:
    if path is None:
        return ExportOptions()
    data = yaml.safe_load(Path(path).read_text()) or {}
    if not isinstance(data, dict):
        raise ValueError(f"{path}: options must be a mapping")
    opts = ExportOptions()
    if "units" in data:
        units = str(data["units"]).lower()
        if units not in UNITS:
            raise ValueError(f"{path}: units must be one of {', '.join(UNITS)}")
        opts.units = units
    if "spacing" in data:
        opts.spacing = float(data["spacing"])
    if "label_height" in data:
        opts.label_height = float(data["label_height"])
    if data.get("layers"):
        opts.layers = {str(k): str(v) for k, v in data["layers"].items()}
    return opts
