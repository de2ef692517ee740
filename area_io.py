"""
Import and export of annotated areas as JSON.

File layout:
    {
      "id": "...", "name": "...", "descriptions": [...],
      "size": [width, height],
      "topology": [{"type": "node", ...}, {"type": "edge", ...}],
      "features": [{"type": "shop" | "restaurant" | "entrance", ...}]
    }

Closed regions are never stored; they are recomputed from the topology.
Feature ids only exist in the editor and are regenerated on import.
"""

from dataclasses import dataclass
from datetime import date
from typing import Optional
import json
from pathlib import Path

from topology import Area, Vertex, Edge, feature_from_dict, generate_id


IMPORT_ERROR_MESSAGE = "Failed to import data. Please ensure the file is a valid Area JSON file."


class AreaImportError(ValueError):
    """Raised when area JSON cannot be interpreted."""
    pass


@dataclass
class ImportResult:
    """Outcome of an import: the area (empty on failure) and an error message."""
    area: Area
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None


# =============================================================================
# Export
# =============================================================================

def area_to_dict(area: Area) -> dict:
    """Convert an area to its JSON form (feature ids are not written)."""
    return {
        "id": area.id,
        "name": area.name,
        "descriptions": list(area.descriptions),
        "size": list(area.size),
        "topology": [p.to_dict() for p in area.topology],
        "features": [f.to_dict() for f in area.features],
    }


def default_export_filename(today: Optional[date] = None) -> str:
    """File name offered for an export, e.g. area-2024-05-01.json."""
    today = today or date.today()
    return f"area-{today.isoformat()}.json"


def export_area(area: Area, filepath: Path | str) -> Path:
    """Write area JSON to filepath; a directory gets the default file name."""
    filepath = Path(filepath)
    if filepath.is_dir():
        filepath = filepath / default_export_filename()
    with open(filepath, 'w') as f:
        json.dump(area_to_dict(area), f, indent=2)
    return filepath


# =============================================================================
# Import
# =============================================================================

def _parse_size(value) -> tuple[float, float]:
    if isinstance(value, (list, tuple)) and len(value) == 2:
        try:
            return (float(value[0]), float(value[1]))
        except (TypeError, ValueError):
            pass
    return (0, 0)


def _parse_topology(records: list) -> list:
    topology = []
    for record in records:
        if not isinstance(record, dict):
            continue
        try:
            if record.get("type") == "node":
                topology.append(Vertex.from_dict(record))
            elif record.get("type") == "edge":
                topology.append(Edge.from_dict(record))
        except (TypeError, ValueError):
            continue
    return topology


def _parse_features(records: list) -> list:
    features = []
    for record in records:
        if not isinstance(record, dict):
            continue
        try:
            features.append(feature_from_dict(record, feature_id=generate_id("f")))
        except (TypeError, ValueError):
            continue
    return features


def parse_area(text: str) -> Area:
    """
    Parse area JSON.

    Optional fields fall back to defaults; unreadable topology and feature
    records are skipped.

    Raises:
        AreaImportError: not JSON, not an object, or topology/features missing
    """
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise AreaImportError(f"Invalid JSON: {e}") from e

    if not isinstance(data, dict):
        raise AreaImportError("Invalid JSON structure")

    if not isinstance(data.get("topology"), list) or not isinstance(data.get("features"), list):
        raise AreaImportError("Invalid Area structure: missing topology or features")

    descriptions = data.get("descriptions")
    if not isinstance(descriptions, list):
        descriptions = []

    return Area(
        id=str(data.get("id") or ""),
        name=str(data.get("name") or ""),
        descriptions=[str(d) for d in descriptions],
        size=_parse_size(data.get("size")),
        topology=_parse_topology(data["topology"]),
        features=_parse_features(data["features"]),
    )


def load_area(filepath: Path | str) -> Area:
    """
    Load an area file.

    Raises:
        FileNotFoundError: file does not exist
        AreaImportError: contents are not a valid area
    """
    filepath = Path(filepath)
    if not filepath.exists():
        raise FileNotFoundError(f"File not found: {filepath}")
    # Undecodable bytes become U+FFFD instead of failing the whole import
    with open(filepath, 'r', encoding='utf-8', errors='replace') as f:
        return parse_area(f.read())


def import_area(source: Path | str) -> ImportResult:
    """
    Import an area from a file path or JSON text without raising.

    A Path, or a string naming an existing file, is read from disk; any
    other string is parsed as JSON. On failure the result holds an empty
    area and a user-facing message.
    """
    try:
        if isinstance(source, Path) or (not source.lstrip().startswith("{") and Path(source).exists()):
            area = load_area(source)
        else:
            area = parse_area(source)
    except (OSError, AreaImportError) as e:
        print(f"Failed to import data: {e}")
        return ImportResult(area=Area(), error=f"{IMPORT_ERROR_MESSAGE} ({e})")
    return ImportResult(area=area)
