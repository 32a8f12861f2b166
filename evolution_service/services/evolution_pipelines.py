"""
🧬 Evolution Aggregation Pipelines
═══════════════════════════════════

Builds the MongoDB aggregation pipelines that answer our two questions about
the samples_pokemon collection. Nothing here talks to the database — every
function returns a plain list of stage dicts, which evolution_queries.py
hands to collection.aggregate().

THE TWO QUESTIONS:
  1. For every pokemon with 1+ evolutions: the name, number and spawn time
     of each evolution.
  2. Every FIRST-STAGE pokemon whose evolution passes a test. Two tests exist:
       - avg_spawns  → the evolution's avg_spawns is greater than 4
       - spawn_time  → the evolution's spawn_time starts with "04"

WHICH POKEMON COUNT?
  - Charmander → Charmeleon → Charizard
  - Charmander: next_evolution, no prev_evolution  → first-stage
  - Charmeleon: next_evolution AND prev_evolution  → middle stage
  - Charizard:  no next_evolution                  → terminal, never returned
  Question 1 returns Charmander AND Charmeleon (both have 1+ evolutions).
  Question 2 only ever looks at Charmander.

HOW A PIPELINE IS PUT TOGETHER:
  $match   → keep only the records we care about
  expand   → turn next_evolution into rows we can join on (see below)
  $lookup  → self-join: find the record whose name == the reference name
  $addFields → copy the resolved fields into a `next_evolutions` payload
  $match   → (question 2 only) keep rows whose payload passes the predicate
  $group   → fold the rows back into one document per originating pokemon
  $project → drop _id and internal fields
  $sort    → stable output order

EXPANSION STRATEGIES:
  "unwind" — the list is expanded: one row per reference, every evolution
             gets resolved and checked.
  "scalar" — the list is NOT expanded: the record's first reference is
             taken as its single reference and joined directly.
  The avg_spawns variant uses "unwind", the spawn_time variant "scalar".
"""

import re


POKEMON_COLLECTION = "samples_pokemon"

# Field the self-join writes its matches into
LOOKUP_AS = "evolution"

# Fields copied from the resolved evolution for question 1
EVOLUTION_FIELDS = ["name", "num", "spawn_time"]


# ═══════════════════════════════════════════════════════════
# FILTERS
# ═══════════════════════════════════════════════════════════

def match_has_evolutions():
    """Records with at least one forward evolution link."""
    return {"$match": {"next_evolution": {"$exists": True}}}


def match_first_stage():
    """
    First-stage forms: a forward link and NO backward link.

    Charmeleon has a prev_evolution, so it is excluded here even though it
    still evolves into Charizard.
    """
    return {
        "$match": {
            "next_evolution": {"$exists": True},
            "prev_evolution": {"$exists": False},
        }
    }


# ═══════════════════════════════════════════════════════════
# EXPANSION STRATEGIES
# ═══════════════════════════════════════════════════════════

def unwind_evolutions():
    """
    One row per next_evolution reference.

      { name: "Bulbasaur", next_evolution: [{Ivysaur}, {Venusaur}] }
    becomes
      { name: "Bulbasaur", next_evolution: {Ivysaur} }
      { name: "Bulbasaur", next_evolution: {Venusaur} }

    Row order follows the original list order, which is also the order the
    $group stage pushes payloads back in.
    """
    return [{"$unwind": "$next_evolution"}]


def first_evolution_as_scalar():
    """
    Replace the next_evolution list with its first reference, in place.
    The list is not expanded; every record stays a single row.
    """
    return [
        {"$addFields": {"next_evolution": {"$arrayElemAt": ["$next_evolution", 0]}}},
    ]


EXPANSION_STRATEGIES = {
    "unwind": unwind_evolutions,
    "scalar": first_evolution_as_scalar,
}


def expansion_stages(expansion):
    if expansion not in EXPANSION_STRATEGIES:
        raise ValueError(
            f"Unknown expansion strategy '{expansion}'. "
            f"Valid strategies: {sorted(EXPANSION_STRATEGIES)}"
        )
    return EXPANSION_STRATEGIES[expansion]()


# ═══════════════════════════════════════════════════════════
# SELF-JOIN
# ═══════════════════════════════════════════════════════════

def lookup_evolution(collection_name=POKEMON_COLLECTION):
    """
    Resolve next_evolution.name against the same collection.

    The matches land in an array under `evolution` — normally one document,
    zero if the reference points at a pokemon that isn't in the collection.
    """
    return {
        "$lookup": {
            "from": collection_name,
            "localField": "next_evolution.name",
            "foreignField": "name",
            "as": LOOKUP_AS,
        }
    }


def resolve_evolution_fields(fields):
    """
    Copy `fields` of the FIRST matched record into the `next_evolutions`
    payload.

    $arrayElemAt on an empty match list yields a missing value, so an
    unresolved reference simply leaves the field out. No error is raised.
    """
    return {
        "$addFields": {
            "next_evolutions": {
                field: {"$arrayElemAt": [f"${LOOKUP_AS}.{field}", 0]}
                for field in fields
            }
        }
    }


# ═══════════════════════════════════════════════════════════
# PREDICATES
# ═══════════════════════════════════════════════════════════
# A predicate is { "field": <evolution field>, "condition": <query operator> }.
# The field is resolved from the evolution and the condition is applied to it.

def avg_spawns_above(threshold=4):
    """Evolution spawns more than `threshold` on average. Exactly `threshold` fails."""
    return {"field": "avg_spawns", "condition": {"$gt": threshold}}


def spawn_time_starts_with(prefix="04"):
    """
    Evolution's spawn_time text begins with `prefix`.

      "04:30" ✅   "04:00" ✅   "14:00" ❌   "00:04" ❌
    """
    return {"field": "spawn_time", "condition": {"$regex": "^" + re.escape(prefix)}}


def match_predicate(predicate):
    return {"$match": {f"next_evolutions.{predicate['field']}": predicate["condition"]}}


# ═══════════════════════════════════════════════════════════
# RESHAPING
# ═══════════════════════════════════════════════════════════

def group_by_pokemon(include_num=False):
    """
    Fold the expanded rows back into one document per originating pokemon,
    pushing every payload in row order.
    """
    group = {
        "_id": "$name",
        "name": {"$first": "$name"},
        "next_evolutions": {"$push": "$next_evolutions"},
    }
    if include_num:
        group["num"] = {"$first": "$num"}
    return {"$group": group}


def project_fields(fields):
    projection = {"_id": 0}
    for field in fields:
        projection[field] = 1
    return {"$project": projection}


def sort_by_name():
    return {"$sort": {"name": 1}}


# ═══════════════════════════════════════════════════════════
# QUESTION 1 — evolution expansion
# ═══════════════════════════════════════════════════════════

def build_evolution_expansion_pipeline(collection_name=POKEMON_COLLECTION):
    """
    Every pokemon with 1+ evolutions, with each evolution resolved:

      {
        name: "Charmander",
        next_evolutions: [
          { name: "Charmeleon", num: "005", spawn_time: "19:00" },
          { name: "Charizard",  num: "006", spawn_time: "13:34" },
        ]
      }
    """
    return [
        match_has_evolutions(),
        *unwind_evolutions(),
        lookup_evolution(collection_name),
        resolve_evolution_fields(EVOLUTION_FIELDS),
        group_by_pokemon(),
        project_fields(["name", "next_evolutions"]),
        sort_by_name(),
    ]


# ═══════════════════════════════════════════════════════════
# QUESTION 2 — first-stage threshold
# ═══════════════════════════════════════════════════════════

def build_first_stage_pipeline(predicate, expansion="unwind", include_evolutions=True,
                               collection_name=POKEMON_COLLECTION):
    """
    First-stage pokemon whose resolved evolution passes `predicate`.

    PARAMETERS:
      predicate:          from avg_spawns_above() / spawn_time_starts_with()
      expansion:          "unwind" or "scalar" (see module docstring)
      include_evolutions: keep the passing evolution payloads in the output
                          next to the base pokemon's name and num

    The payload always carries name and num of the evolution plus the field
    the predicate tests.
    """
    fields = ["name", "num"]
    if predicate["field"] not in fields:
        fields.append(predicate["field"])

    output_fields = ["name", "num"]
    if include_evolutions:
        output_fields.append("next_evolutions")

    return [
        match_first_stage(),
        *expansion_stages(expansion),
        lookup_evolution(collection_name),
        resolve_evolution_fields(fields),
        match_predicate(predicate),
        group_by_pokemon(include_num=True),
        project_fields(output_fields),
        sort_by_name(),
    ]


# ── Named variants ──
# The two readings of question 2 disagree on both the test AND on whether
# next_evolution is a list or a single reference. Both are kept, by name.
FIRST_STAGE_VARIANTS = {
    "avg_spawns": {
        "description": "first-stage pokemon with an evolution whose avg_spawns > threshold",
        "predicate": avg_spawns_above,
        "expansion": "unwind",
        "include_evolutions": True,
    },
    "spawn_time": {
        "description": "first-stage pokemon whose evolution spawn_time starts with a prefix",
        "predicate": spawn_time_starts_with,
        "expansion": "scalar",
        "include_evolutions": False,
    },
}


def build_first_stage_variant_pipeline(variant, argument=None, collection_name=POKEMON_COLLECTION):
    """
    Build the pipeline for a named variant. `argument` is passed to the
    variant's predicate (threshold or prefix); None keeps its default.
    """
    if variant not in FIRST_STAGE_VARIANTS:
        raise ValueError(
            f"Unknown first-stage variant '{variant}'. "
            f"Valid variants: {sorted(FIRST_STAGE_VARIANTS)}"
        )
    definition = FIRST_STAGE_VARIANTS[variant]
    predicate = definition["predicate"]() if argument is None else definition["predicate"](argument)
    return build_first_stage_pipeline(
        predicate,
        expansion=definition["expansion"],
        include_evolutions=definition["include_evolutions"],
        collection_name=collection_name,
    )


def build_first_stage_avg_spawns_pipeline(threshold=4, collection_name=POKEMON_COLLECTION):
    return build_first_stage_variant_pipeline("avg_spawns", threshold, collection_name)


def build_first_stage_spawn_time_pipeline(prefix="04", collection_name=POKEMON_COLLECTION):
    return build_first_stage_variant_pipeline("spawn_time", prefix, collection_name)
