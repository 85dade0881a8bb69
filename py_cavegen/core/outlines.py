"""Boundary outline extraction from a triangulated floor mesh."""

from typing import Dict, Iterable, List, Set

import structlog

from .errors import CaveInvariantError
from .mesh_data import Triangle

logger = structlog.get_logger()


class OutlineTracer:
    """
    Threads boundary edges of a mesh into closed vertex loops.

    An edge is on the boundary when exactly one triangle uses it. Vertices
    known to be interior are pre-marked as checked and never start or join an
    outline.
    """

    def __init__(self, triangle_dictionary: Dict[int, List[Triangle]], interior_vertices: Iterable[int] = ()):
        self.triangle_dictionary = triangle_dictionary
        self.checked_vertices: Set[int] = set(interior_vertices)
        self.outlines: List[List[int]] = []

    def is_outline_edge(self, vertex_a: int, vertex_b: int) -> bool:
        shared = 0
        for triangle in self.triangle_dictionary.get(vertex_a, ()):
            if triangle.contains(vertex_b):
                shared += 1
                if shared > 1:
                    break
        return shared == 1

    def get_connected_outline_vertex(self, vertex_index: int) -> int:
        """
        Find an unchecked vertex joined to ``vertex_index`` by a boundary edge.

        Returns:
            The neighbouring vertex index, or -1 if there is none
        """
        for triangle in self.triangle_dictionary.get(vertex_index, ()):
            for vertex_b in triangle:
                if vertex_b == vertex_index or vertex_b in self.checked_vertices:
                    continue
                if self.is_outline_edge(vertex_index, vertex_b):
                    return vertex_b
        return -1

    def follow_outline(self, start_vertex: int, outline: List[int]) -> None:
        """Walk boundary edges from ``start_vertex`` until the loop runs out."""
        members = set(outline)
        vertex_index = start_vertex
        while vertex_index != -1:
            if vertex_index in members:
                raise CaveInvariantError(f"Outline revisits vertex {vertex_index}")
            outline.append(vertex_index)
            members.add(vertex_index)
            self.checked_vertices.add(vertex_index)
            vertex_index = self.get_connected_outline_vertex(vertex_index)

    def calculate_mesh_outlines(self, vertex_count: int) -> List[List[int]]:
        """
        Trace every outline in the mesh.

        Args:
            vertex_count: Number of vertices in the floor mesh

        Returns:
            Outlines as vertex index lists whose first and last entries match
        """
        for vertex_index in range(vertex_count):
            if vertex_index in self.checked_vertices:
                continue
            next_vertex = self.get_connected_outline_vertex(vertex_index)
            if next_vertex == -1:
                continue

            self.checked_vertices.add(vertex_index)
            outline = [vertex_index]
            self.follow_outline(next_vertex, outline)
            outline.append(vertex_index)
            self.outlines.append(outline)

        logger.debug(
            "Outlines traced",
            outlines=len(self.outlines),
            outline_vertices=sum(len(outline) - 1 for outline in self.outlines),
        )
        return self.outlines
