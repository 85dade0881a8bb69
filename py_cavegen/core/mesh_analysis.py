"""
Mesh topology checks.

Used by the tests and by the sample rendering script to confirm that a floor
mesh is closed (every edge used by one or two triangles) and that traced
outlines are closed loops along boundary edges.
"""

from collections import defaultdict
from typing import Dict, List, Sequence, Tuple

from .mesh_data import MeshData

Edge = Tuple[int, int]


def edge_usage(mesh: MeshData) -> Dict[Edge, int]:
    """Count how many triangles use each undirected edge."""
    usage: Dict[Edge, int] = defaultdict(int)
    for a, b, c in mesh.faces().tolist():
        for edge in ((a, b), (b, c), (c, a)):
            usage[tuple(sorted(edge))] += 1
    return dict(usage)


def boundary_edges(mesh: MeshData) -> List[Edge]:
    """Edges used by exactly one triangle."""
    return [edge for edge, count in edge_usage(mesh).items() if count == 1]


def validate_mesh_closure(mesh: MeshData) -> Tuple[bool, List[str]]:
    """
    Validate that a mesh has no over-shared edges.

    A closed floor mesh has every interior edge shared by exactly two
    triangles and every boundary edge by exactly one.

    Args:
        mesh: Mesh to validate

    Returns:
        Tuple of (is_closed, list_of_errors)
    """
    errors = []
    if len(mesh.triangles) % 3 != 0:
        errors.append(f"Index buffer length {len(mesh.triangles)} is not a multiple of 3")
        return False, errors

    if mesh.triangle_count and (mesh.triangles.min() < 0 or mesh.triangles.max() >= mesh.vertex_count):
        errors.append("Index buffer references a vertex out of range")

    for edge, count in edge_usage(mesh).items():
        if count > 2:
            errors.append(f"Edge {edge} used by {count} triangles (should be 1 or 2)")

    return len(errors) == 0, errors


def validate_outlines(mesh: MeshData, outlines: Sequence[Sequence[int]]) -> Tuple[bool, List[str]]:
    """
    Validate that outlines are closed loops of boundary edges.

    Every outline must start and end on the same vertex, every step must be a
    boundary edge, and no boundary edge may be left uncovered.
    """
    errors = []
    boundary = set(boundary_edges(mesh))
    covered = set()

    for index, outline in enumerate(outlines):
        if len(outline) < 4:
            errors.append(f"Outline {index} has only {len(outline)} entries")
            continue
        if outline[0] != outline[-1]:
            errors.append(f"Outline {index} is not closed ({outline[0]} != {outline[-1]})")
        for a, b in zip(outline, outline[1:]):
            edge = tuple(sorted((a, b)))
            if edge not in boundary:
                errors.append(f"Outline {index} step {edge} is not a boundary edge")
            covered.add(edge)

    missing = boundary - covered
    if missing:
        errors.append(f"{len(missing)} boundary edge(s) are not part of any outline")

    return len(errors) == 0, errors
