from __future__ import annotations

import logging
import os
import xml.etree.ElementTree as ET
from dataclasses import dataclass
from pathlib import Path

from src.app.ports.output import IMapProvider
from src.domain.exceptions import GraphLoadError
from src.domain.models import GraphNode, RoadGraph

logger = logging.getLogger(__name__)

# Roads usable for routing. Service roads, footways and the like are skipped.
ALLOWED_HIGHWAY_TYPES = frozenset(
    {
        "motorway",
        "trunk",
        "primary",
        "secondary",
        "tertiary",
        "unclassified",
        "residential",
        "living_street",
        "motorway_link",
        "trunk_link",
        "primary_link",
        "secondary_link",
        "tertiary_link",
    }
)


@dataclass(slots=True)
class OsmXmlMapAdapter(IMapProvider):
    """Builds a road graph from an OpenStreetMap XML extract.

    Every <node> becomes a GraphNode (named from its `name` tag). Only ways with
    an allowed `highway` tag contribute edges, between consecutive <nd> refs;
    their nodes are flagged routable.

    Env vars:
      - OSM_DB_PATH: path to the .osm file
    """

    path: str | Path | None = None

    def _path(self) -> Path:
        value = self.path or os.getenv("OSM_DB_PATH")
        if not value:
            raise GraphLoadError("Missing OSM_DB_PATH")
        return Path(value)

    def load_road_graph(self) -> RoadGraph:
        path = self._path()
        if not path.exists():
            raise FileNotFoundError(f"OSM file not found: {path}")

        graph = RoadGraph()
        way_count = 0
        skipped_refs = 0

        root: ET.Element | None = None
        try:
            for event, elem in ET.iterparse(path, events=("start", "end")):
                if event == "start":
                    if root is None:
                        root = elem
                    continue
                if elem.tag == "node":
                    graph.add_node(self._parse_node(elem))
                elif elem.tag == "way":
                    refs = [int(nd.attrib["ref"]) for nd in elem.iter("nd")]
                    tags = self._tags(elem)
                    if tags.get("highway") in ALLOWED_HIGHWAY_TYPES:
                        way_count += 1
                        skipped_refs += self._add_way(graph, refs)
                else:
                    continue
                # Finished elements stay attached to <osm> unless dropped.
                elem.clear()
                if root is not None:
                    root.clear()
        except ET.ParseError as exc:
            raise GraphLoadError(f"Malformed OSM file {path}: {exc}") from exc

        if skipped_refs:
            logger.warning("Skipped %d way refs to unknown nodes", skipped_refs)
        logger.info("Parsed %s: %d nodes, %d roads", path, len(graph), way_count)
        return graph

    def _parse_node(self, elem: ET.Element) -> GraphNode:
        try:
            node_id = int(elem.attrib["id"])
            lat = float(elem.attrib["lat"])
            lon = float(elem.attrib["lon"])
        except (KeyError, ValueError) as exc:
            raise GraphLoadError(f"Invalid OSM node: {elem.attrib}") from exc

        name = (self._tags(elem).get("name") or "").strip() or None
        return GraphNode(id=node_id, lon=lon, lat=lat, name=name)

    def _tags(self, elem: ET.Element) -> dict[str, str]:
        return {
            tag.attrib["k"]: tag.attrib.get("v", "")
            for tag in elem.iter("tag")
            if "k" in tag.attrib
        }

    def _add_way(self, graph: RoadGraph, refs: list[int]) -> int:
        """Link consecutive refs; a gap left by an unknown ref stays a gap."""

        known = [ref for ref in refs if ref in graph]
        for ref in known:
            graph.mark_routable(ref)
        for a, b in zip(refs, refs[1:]):
            if a in graph and b in graph:
                graph.add_edge(a, b)
        return len(refs) - len(known)
