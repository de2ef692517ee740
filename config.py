"""
Configuration for closed-region extraction.

Holds the resolution-dependent constants used when turning a drawn
topology graph into filled regions.
"""

from dataclasses import dataclass
import json
from pathlib import Path


@dataclass
class RegionConfig:
    """
    Settings for closed-region extraction.

    Attributes:
        edge_tolerance: Distance (image pixels) within which a point counts as
            lying on a polygon edge during containment tests
        min_region_area: Regions with a smaller net area are discarded (pixels^2)
        min_graph_size: Graphs with fewer vertices or edges than this yield no regions
        use_bbox_prefilter: Skip containment tests for loops whose bounding
            boxes cannot contain each other
    """
    # Containment
    edge_tolerance: float = 8.0  # px, absorbs drawing jitter

    # Output filtering
    min_region_area: float = 50.0  # px^2, suppresses slivers

    # Short-circuit
    min_graph_size: int = 3

    # Nesting
    use_bbox_prefilter: bool = True

    def validate(self) -> list[str]:
        """
        Validate configuration values.

        Returns:
            List of error messages (empty if valid)
        """
        errors = []

        if self.edge_tolerance < 0:
            errors.append(f"edge_tolerance cannot be negative, got {self.edge_tolerance}")

        if self.min_region_area < 0:
            errors.append(f"min_region_area cannot be negative, got {self.min_region_area}")

        if self.min_graph_size < 3:
            errors.append(f"min_graph_size must be >= 3, got {self.min_graph_size}")

        return errors

    def scaled(self, factor: float) -> "RegionConfig":
        """Return a copy with tolerances scaled for an image resized by factor."""
        return RegionConfig(
            edge_tolerance=self.edge_tolerance * factor,
            min_region_area=self.min_region_area * factor * factor,
            min_graph_size=self.min_graph_size,
            use_bbox_prefilter=self.use_bbox_prefilter,
        )

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {
            "edge_tolerance": self.edge_tolerance,
            "min_region_area": self.min_region_area,
            "min_graph_size": self.min_graph_size,
            "use_bbox_prefilter": self.use_bbox_prefilter,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "RegionConfig":
        """Create from dictionary."""
        # Older files stored the tolerance under the canvas name
        tolerance = data.get("edge_tolerance", data.get("stack_tolerance", 8.0))

        return cls(
            edge_tolerance=float(tolerance),
            min_region_area=float(data.get("min_region_area", 50.0)),
            min_graph_size=int(data.get("min_graph_size", 3)),
            use_bbox_prefilter=bool(data.get("use_bbox_prefilter", True)),
        )

    def save(self, filepath: Path | str) -> None:
        """Save configuration to JSON file."""
        filepath = Path(filepath)
        with open(filepath, 'w') as f:
            json.dump(self.to_dict(), f, indent=2)

    @classmethod
    def load(cls, filepath: Path | str) -> "RegionConfig":
        """Load configuration from JSON file."""
        filepath = Path(filepath)
        if not filepath.exists():
            return cls()  # Return defaults if file doesn't exist

        with open(filepath, 'r') as f:
            data = json.load(f)
        return cls.from_dict(data)

    @classmethod
    def load_for_area(cls, area_filepath: Path | str) -> "RegionConfig":
        """
        Load configuration for a specific area file.

        Looks for <area_name>.regions_config.json next to the area file.
        Returns defaults if config file doesn't exist.
        """
        area_path = Path(area_filepath)
        config_path = area_path.with_suffix('.regions_config.json')
        return cls.load(config_path)

    def save_for_area(self, area_filepath: Path | str) -> None:
        """
        Save configuration for a specific area file.

        Saves as <area_name>.regions_config.json next to the area file.
        """
        area_path = Path(area_filepath)
        config_path = area_path.with_suffix('.regions_config.json')
        self.save(config_path)


# Scale factors relative to a ~1000px floor plan scan
RESOLUTION_PRESETS = {
    "low": 0.5,      # phone photos, ~500px
    "standard": 1.0,
    "high": 2.0,     # 300dpi scans
    "print": 4.0,    # 600dpi scans
}


def config_for_resolution(preset: str) -> RegionConfig:
    """Return the default config scaled for a named resolution preset."""
    if preset not in RESOLUTION_PRESETS:
        raise ValueError(f"Unknown resolution preset: {preset}")
    return RegionConfig().scaled(RESOLUTION_PRESETS[preset])
