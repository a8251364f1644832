"""
Array Configuration.

Load site, array and identity settings from a YAML file.

Example config:
```yaml
array:
  longitude: -118.2817      # degrees
  latitude: 37.2339         # degrees
  altitude: 1222.0          # meters
  antenna_file: antennas.txt

telescope:
  name: OVRO
  observer: pipeline
  project: zenith-survey
  correlator: XENGINE

antennas:
  prefix: ANT
  station: OVRO
  type: GROUND-BASED
  mount: ALT-AZ
  dish_diameter: 2.0

field:
  name: ZENITH

spectral_window:
  n_chan: 64
  center_freq: 1.4e9        # Hz
  bandwidth: 2.0e7          # Hz
```
"""

import yaml
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional


@dataclass(frozen=True)
class ArrayReference:
    """Nominal centre of the array."""
    longitude: float                 # degrees
    latitude: float                  # degrees
    altitude: float = 0.0            # meters


@dataclass
class SpectralConfig:
    """Single spectral window layout."""
    n_chan: int
    center_freq: float               # Hz
    bandwidth: float                 # Hz


@dataclass
class ArrayConfig:
    """Complete array configuration."""
    reference: ArrayReference
    antenna_file: Optional[str] = None
    telescope_name: str = "ARRAY"
    observer: str = ""
    project: str = ""
    correlator_name: str = "CORRELATOR"
    antenna_prefix: str = "ANT"
    station_name: str = "ARRAY"
    antenna_type: str = "GROUND-BASED"
    antenna_mount: str = "ALT-AZ"
    dish_diameter: float = 1.0
    field_name: str = "ZENITH"
    spectral: Optional[SpectralConfig] = None
    raw_yaml: dict = field(default_factory=dict, repr=False)

    def antenna_name(self, index: int) -> str:
        """Antenna name for 0-based ``index``: prefix + 1-based number."""
        return f"{self.antenna_prefix}{index + 1:03d}"


def load_config(filepath: str) -> ArrayConfig:
    """
    Load configuration from YAML file.

    Parameters
    ----------
    filepath : str
        Path to YAML configuration file

    Returns
    -------
    config : ArrayConfig
    """
    with open(filepath, "r") as f:
        raw = yaml.safe_load(f) or {}

    return parse_config(raw, base_dir=Path(filepath).parent)


def parse_config(raw: dict, base_dir: Optional[Path] = None) -> ArrayConfig:
    """
    Build an ArrayConfig from an already-parsed YAML mapping.

    ``antenna_file`` is resolved relative to ``base_dir`` when given.
    """
    if "array" not in raw:
        raise ValueError("Config missing 'array' section")

    array = raw["array"] or {}
    for key in ("longitude", "latitude"):
        if key not in array:
            raise ValueError(f"Config 'array' section missing '{key}'")

    reference = ArrayReference(
        longitude=float(array["longitude"]),
        latitude=float(array["latitude"]),
        altitude=float(array.get("altitude", 0.0)),
    )

    antenna_file = array.get("antenna_file")
    if antenna_file is not None and base_dir is not None:
        antenna_file = str(Path(base_dir) / antenna_file)

    telescope = raw.get("telescope") or {}
    antennas = raw.get("antennas") or {}
    field_cfg = raw.get("field") or {}

    spectral = None
    if raw.get("spectral_window"):
        spw = raw["spectral_window"]
        spectral = SpectralConfig(
            n_chan=int(spw["n_chan"]),
            center_freq=float(spw["center_freq"]),
            bandwidth=float(spw["bandwidth"]),
        )

    return ArrayConfig(
        reference=reference,
        antenna_file=antenna_file,
        telescope_name=str(telescope.get("name", "ARRAY")),
        observer=str(telescope.get("observer", "")),
        project=str(telescope.get("project", "")),
        correlator_name=str(telescope.get("correlator", "CORRELATOR")),
        antenna_prefix=str(antennas.get("prefix", "ANT")),
        station_name=str(antennas.get("station", telescope.get("name", "ARRAY"))),
        antenna_type=str(antennas.get("type", "GROUND-BASED")),
        antenna_mount=str(antennas.get("mount", "ALT-AZ")),
        dish_diameter=float(antennas.get("dish_diameter", 1.0)),
        field_name=str(field_cfg.get("name", "ZENITH")),
        spectral=spectral,
        raw_yaml=raw,
    )
