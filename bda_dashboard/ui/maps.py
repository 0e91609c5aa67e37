"""
Map Renderer

Two independent map instances (the administrative overview map and the
layouts map), each with a fixed OpenStreetMap base layer and named layer
groups of vector shapes. A layer group is always replaced wholesale:
clear, then redraw.

Display goes through folium; one FeatureGroup per layer group.
"""

from __future__ import annotations

import logging
from collections import defaultdict
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional, Sequence, Tuple

import folium

from .content import MapView
from .page import Page

logger = logging.getLogger("bda.maps")

LatLon = Tuple[float, float]

# Bengaluru
DEFAULT_CENTER: LatLon = (12.9716, 77.5946)

TILE_URL = "https://{s}.tile.openstreetmap.org/{z}/{x}/{y}.png"
TILE_ATTRIBUTION = "&copy; OpenStreetMap contributors"
MAX_ZOOM = 18

HOVER_FILL_DELTA = 0.2
HOVER_WEIGHT_DELTA = 1


# =============================================================================
# Shapes
# =============================================================================

@dataclass(frozen=True)
class ShapeStyle:
    color: str = "#8b6f47"
    weight: float = 2
    fill_opacity: float = 0.2
    fill_color: Optional[str] = None
    dash_array: Optional[str] = None


def base_style(style: ShapeStyle) -> Dict[str, Any]:
    """Leaflet path options for the resting state."""
    options = {
        "color": style.color,
        "weight": style.weight,
        "fillOpacity": style.fill_opacity,
        "fillColor": style.fill_color or style.color,
    }
    if style.dash_array:
        options["dashArray"] = style.dash_array
    return options


def hover_style(style: ShapeStyle) -> Dict[str, Any]:
    """Resting style with fill opacity and stroke weight raised by fixed deltas."""
    options = base_style(style)
    options["fillOpacity"] = min(1.0, style.fill_opacity + HOVER_FILL_DELTA)
    options["weight"] = style.weight + HOVER_WEIGHT_DELTA
    return options


@dataclass
class Shape:
    """
    A vector shape with style and popup.

    coordinates:
        polygon   -> list of rings, each a list of (lat, lon)
        rectangle -> ((south, west), (north, east))
        circle    -> (lat, lon)
    """
    kind: str
    coordinates: Any
    style: ShapeStyle = field(default_factory=ShapeStyle)
    popup: Optional[str] = None
    tooltip: Optional[str] = None
    radius: float = 6

    @classmethod
    def polygon(cls, rings: Sequence[Sequence[LatLon]], **kwargs) -> "Shape":
        return cls("polygon", [list(r) for r in rings], **kwargs)

    @classmethod
    def rectangle(cls, south_west: LatLon, north_east: LatLon, **kwargs) -> "Shape":
        return cls("rectangle", (tuple(south_west), tuple(north_east)), **kwargs)

    @classmethod
    def circle(cls, center: LatLon, **kwargs) -> "Shape":
        return cls("circle", tuple(center), **kwargs)

    def to_feature(self) -> Dict[str, Any]:
        """GeoJSON Feature ([lon, lat] positions)."""
        if self.kind == "circle":
            lat, lon = self.coordinates
            geometry = {"type": "Point", "coordinates": [lon, lat]}
        elif self.kind == "rectangle":
            (south, west), (north, east) = self.coordinates
            ring = [[west, south], [east, south], [east, north], [west, north], [west, south]]
            geometry = {"type": "Polygon", "coordinates": [ring]}
        elif self.kind == "polygon":
            rings = []
            for ring in self.coordinates:
                positions = [[lon, lat] for lat, lon in ring]
                if positions and positions[0] != positions[-1]:
                    positions.append(positions[0])
                rings.append(positions)
            geometry = {"type": "MultiPolygon", "coordinates": [[r] for r in rings]}
        else:
            raise ValueError(f"Unknown shape kind: {self.kind}")
        return {"type": "Feature", "geometry": geometry, "properties": {}}


# =============================================================================
# Map instances
# =============================================================================

@dataclass(frozen=True)
class MapSpec:
    instance_id: str
    mount_id: str
    center: LatLon = DEFAULT_CENTER
    zoom: int = 11
    height: int = 520


MAP_SPECS: Dict[str, MapSpec] = {
    "overview": MapSpec("overview", "map", zoom=11),
    "layouts": MapSpec("layouts", "layoutsMap", zoom=12),
}


@dataclass
class MapInstance:
    spec: MapSpec
    layer_groups: Dict[str, List[Shape]] = field(default_factory=dict)
    size_revision: int = 0


class MapRenderer:
    """Owns both map instances and their layer groups."""

    def __init__(self, specs: Optional[Dict[str, MapSpec]] = None):
        self.specs = dict(MAP_SPECS if specs is None else specs)
        self._instances: Dict[str, MapInstance] = {}
        self._ready_hooks: Dict[str, List[Callable[[], None]]] = defaultdict(list)

    def on_ready(self, instance_id: str, hook: Callable[[], None]) -> None:
        """Run `hook` right after `instance_id` is initialized."""
        self._ready_hooks[instance_id].append(hook)

    def initialize(self, instance_id: str) -> MapInstance:
        """
        Create the instance and its base layer.

        Guarding against a second call is the caller's job: initializing
        again drops every layer group.
        """
        spec = self.specs[instance_id]
        instance = MapInstance(spec)
        self._instances[instance_id] = instance
        logger.info(f"Map '{instance_id}' initialized at {spec.center} zoom {spec.zoom}")
        for hook in self._ready_hooks.get(instance_id, []):
            try:
                hook()
            except Exception:
                logger.exception(f"Map ready hook failed for '{instance_id}'")
        return instance

    def is_initialized(self, instance_id: str) -> bool:
        return instance_id in self._instances

    def instance(self, instance_id: str) -> Optional[MapInstance]:
        return self._instances.get(instance_id)

    def set_layer_group(self, instance_id: str, group_id: str, shapes: Sequence[Shape]) -> bool:
        """
        Replace every shape under `group_id` with `shapes`.

        Returns False (and does nothing) before the instance is initialized.
        """
        instance = self._instances.get(instance_id)
        if instance is None:
            return False
        instance.layer_groups.pop(group_id, None)
        instance.layer_groups[group_id] = list(shapes)
        logger.debug(f"Layer group '{group_id}' on '{instance_id}' now has {len(shapes)} shapes")
        return True

    def shapes(self, instance_id: str, group_id: str) -> List[Shape]:
        instance = self._instances.get(instance_id)
        if instance is None:
            return []
        return list(instance.layer_groups.get(group_id, []))

    def invalidate_size(self, instance_id: str) -> None:
        """Ask the instance to recompute its layout on the next draw."""
        instance = self._instances.get(instance_id)
        if instance is not None:
            instance.size_revision += 1

    # =========================================================================
    # Display
    # =========================================================================

    def to_folium(self, instance_id: str) -> folium.Map:
        instance = self._instances[instance_id]
        spec = instance.spec
        fmap = folium.Map(
            location=list(spec.center),
            zoom_start=spec.zoom,
            tiles=None,
            max_zoom=MAX_ZOOM,
            prefer_canvas=True,
        )
        folium.TileLayer(
            tiles=TILE_URL,
            attr=TILE_ATTRIBUTION,
            name="OpenStreetMap",
            max_zoom=MAX_ZOOM,
        ).add_to(fmap)

        for group_id, shapes in instance.layer_groups.items():
            group = folium.FeatureGroup(name=group_id)
            for shape in shapes:
                _add_shape(group, shape)
            group.add_to(fmap)

        if instance.layer_groups:
            folium.LayerControl(collapsed=True).add_to(fmap)
        return fmap

    def draw(self, instance_id: str, page: Page) -> bool:
        """Push the current map into its mount; no-op if either is missing."""
        instance = self._instances.get(instance_id)
        if instance is None:
            return False
        mount = page.mount(instance.spec.mount_id)
        if mount is None:
            return False
        mount.replace(MapView(
            instance_id=instance_id,
            size_revision=instance.size_revision,
            folium_map=self.to_folium(instance_id),
            height=instance.spec.height,
        ))
        return True


def _add_shape(parent: folium.FeatureGroup, shape: Shape) -> None:
    resting = base_style(shape.style)
    hover = hover_style(shape.style)
    kwargs: Dict[str, Any] = {}
    if shape.kind == "circle":
        kwargs["marker"] = folium.CircleMarker(radius=shape.radius)
    folium.GeoJson(
        shape.to_feature(),
        style_function=lambda _feature, s=resting: s,
        highlight_function=lambda _feature, h=hover: h,
        popup=folium.Popup(shape.popup, max_width=320) if shape.popup else None,
        tooltip=shape.tooltip,
        **kwargs,
    ).add_to(parent)
