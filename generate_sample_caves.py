#!/usr/bin/env python3
"""
Render sample caves for every named preset.

Each image shows:
1. The processed tile grid (walls dark, floor light)
2. Carved passages between rooms
3. Wall outlines traced from the floor mesh
4. Player and enemy spawn points

Usage:
    python generate_sample_caves.py [seed]

If no seed is provided, defaults to "default_seed"
"""

import sys
from pathlib import Path
sys.path.append(str(Path(__file__).parent))

from py_cavegen.config import get_preset, list_presets, settings
from py_cavegen.core.errors import CaveGenerationError
from py_cavegen.core.mesh_analysis import validate_mesh_closure, validate_outlines
from py_cavegen.core.pipeline import CaveGenerator
from py_cavegen.core.spawning import SpawnPlanner
from py_cavegen.utils import configure_logging
import matplotlib.pyplot as plt
import numpy as np
from matplotlib.colors import ListedColormap


def create_cave_with_full_pipeline(preset="default", seed="default"):
    """Generate a cave for ``preset`` and save a rendering of it."""
    params = get_preset(preset)

    print(f"\nGenerating {preset} cave...")
    print(f"  Dimensions: {params['width']}x{params['height']}")
    print(f"  Fill: {params['fill_percent']}%")
    print(f"  Seed: {seed}")

    # Step 1: Generate
    print("  1. Running generation pipeline...")
    cave = CaveGenerator(seed=seed, **params).generate()
    print(f"     {len(cave.rooms)} rooms, {len(cave.passages)} passages")

    # Step 2: Check mesh
    print("  2. Checking mesh topology...")
    closed, errors = validate_mesh_closure(cave.floor)
    outlines_ok, outline_errors = validate_outlines(cave.floor, cave.outlines)
    print(f"     Floor: {cave.floor.vertex_count} vertices, {cave.floor.triangle_count} triangles "
          f"({'closed' if closed else f'{len(errors)} problems'})")
    print(f"     Outlines: {len(cave.outlines)} "
          f"({'closed' if outlines_ok else f'{len(outline_errors)} problems'})")

    # Step 3: Spawns
    print("  3. Planning spawns...")
    planner = SpawnPlanner(
        cave.width,
        cave.height,
        spawn_seed=settings.spawn_seed,
        spawn_height=settings.spawn_height,
        tiles_per_enemy=settings.tiles_per_enemy,
    )
    plan = planner.plan(cave.rooms)
    print(f"     Player in main room ({cave.main_room.size} tiles), {plan.enemy_count} enemies")

    # Create visualization
    print("  4. Creating visualization...")
    fig, ax = plt.subplots(figsize=(12, 12 * cave.height / cave.width))

    half_w, half_h = cave.width / 2, cave.height / 2
    cmap = ListedColormap(["#2b2118", "#d8c9a3"])
    ax.imshow(
        cave.grid.T,
        extent=(-half_w, half_w, -half_h, half_h),
        origin="lower",
        cmap=cmap,
        vmin=0,
        vmax=1,
        aspect="equal",
        interpolation="nearest",
    )

    # Outlines in world space (x, z)
    vertices = cave.floor.vertices
    for outline in cave.outlines:
        points = vertices[np.asarray(outline)]
        ax.plot(points[:, 0], points[:, 2], color="#8b0000", linewidth=0.8)

    # Passage lines
    for passage in cave.passages:
        start = cave.coord_to_world_point(passage.tile_a)
        end = cave.coord_to_world_point(passage.tile_b)
        ax.plot([start[0], end[0]], [start[2], end[2]], color="#1f77b4", linewidth=1.0, linestyle="--")

    # Spawns
    ax.scatter([plan.player.position[0]], [plan.player.position[2]], color="lime", s=60,
               edgecolors="black", zorder=5, label="Player")
    if plan.enemies:
        enemy_positions = np.array([enemy.position for enemy in plan.enemies])
        ax.scatter(enemy_positions[:, 0], enemy_positions[:, 2], color="red", s=25,
                   edgecolors="black", zorder=5, label="Enemies")

    ax.set_xticks([])
    ax.set_yticks([])
    ax.legend(loc="upper right", fontsize=9)

    title = f"{preset.title()} - {cave.width}x{cave.height} - fill {params['fill_percent']}%\n"
    title += f"Rooms: {len(cave.rooms)} | Passages: {len(cave.passages)} | Outlines: {len(cave.outlines)}"
    ax.set_title(title, fontsize=14, pad=20)

    ax.text(0.02, 0.02, f"Seed: {seed}", transform=ax.transAxes,
            bbox=dict(boxstyle="round,pad=0.3", facecolor="white", alpha=0.8),
            horizontalalignment="left", fontsize=10, family="monospace")

    output_file = f"cave_{preset}_{seed}.png"
    plt.savefig(output_file, dpi=200, bbox_inches="tight", pad_inches=0.1)
    print(f"  5. Saved to: {output_file}")

    plt.close(fig)

    return cave


def main():
    """Generate sample caves for every preset."""

    seed = sys.argv[1] if len(sys.argv) > 1 else "default_seed"
    configure_logging()

    print("Generating caves with the full pipeline")
    print(f"Using seed: {seed}")
    print("=" * 60)

    failures = 0
    for preset in list_presets():
        try:
            create_cave_with_full_pipeline(preset=preset, seed=seed)
        except CaveGenerationError as e:
            failures += 1
            print(f"  ERROR generating {preset}: {e}")

    print("\n" + "=" * 60)
    if failures:
        print(f"{failures} preset(s) failed")
        sys.exit(1)
    print("All caves generated successfully!")


if __name__ == "__main__":
    main()
