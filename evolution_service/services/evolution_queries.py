"""
🔎 Evolution Queries
═════════════════════

Runs the pipelines from evolution_pipelines.py against a collection and
returns the result documents as a list of dicts.

Every function takes the collection as its first argument — a
pymongo Collection in production, a mongomock one in the tests. All of them
are read-only: collection.aggregate() with no $out/$merge stage never
writes anything, so running a query twice gives the same answer.
"""

from evolution_service.services.evolution_pipelines import (
    FIRST_STAGE_VARIANTS,
    build_evolution_expansion_pipeline,
    build_first_stage_avg_spawns_pipeline,
    build_first_stage_spawn_time_pipeline,
    build_first_stage_variant_pipeline,
)


def run_pipeline(collection, pipeline):
    """
    Execute one aggregation pipeline and drain the cursor into a list.

    aggregate() returns a cursor (lazy iterator); list() pulls every
    document so the caller can print, count or compare the results.
    """
    return list(collection.aggregate(pipeline))


def find_pokemon_with_evolutions(collection):
    """
    QUESTION 1 — every pokemon that has 1 or more evolutions, with the name,
    number and spawn time of each evolution.

    RETURNS: [{ "name": ..., "next_evolutions": [{name, num, spawn_time}, ...] }, ...]
    """
    pipeline = build_evolution_expansion_pipeline(collection.name)
    return run_pipeline(collection, pipeline)


def find_first_stage_by_avg_spawns(collection, threshold=4):
    """
    QUESTION 2 (avg_spawns reading) — first-stage pokemon with an evolution
    whose avg_spawns is strictly greater than `threshold`.

    RETURNS: [{ "name": ..., "num": ..., "next_evolutions": [{name, num, avg_spawns}, ...] }, ...]
    """
    pipeline = build_first_stage_avg_spawns_pipeline(threshold, collection.name)
    return run_pipeline(collection, pipeline)


def find_first_stage_by_spawn_time(collection, prefix="04"):
    """
    QUESTION 2 (spawn_time reading) — first-stage pokemon whose evolution's
    spawn_time starts with `prefix`.

    RETURNS: [{ "name": ..., "num": ... }, ...]
    """
    pipeline = build_first_stage_spawn_time_pipeline(prefix, collection.name)
    return run_pipeline(collection, pipeline)


def find_first_stage_pokemon(collection, variant="avg_spawns", argument=None):
    """
    Dispatch QUESTION 2 by variant name ("avg_spawns" or "spawn_time").
    `argument` is the threshold or prefix; None keeps the variant default.
    """
    pipeline = build_first_stage_variant_pipeline(variant, argument, collection.name)
    return run_pipeline(collection, pipeline)


def describe_variant(variant):
    if variant not in FIRST_STAGE_VARIANTS:
        raise ValueError(
            f"Unknown first-stage variant '{variant}'. "
            f"Valid variants: {sorted(FIRST_STAGE_VARIANTS)}"
        )
    return FIRST_STAGE_VARIANTS[variant]["description"]
