import argparse
import logging
import sys
from typing import Dict, List, Optional, Sequence, Tuple

from euclid_engine import (
    ValidationError,
    describe_theorem_conclusion,
    ensure_valid_proposition_def,
    get_proposition,
    point_positions,
    replay_construction,
    serialize_citations,
    serialize_full_proof_state,
    serialize_ghost_layers,
)

logger = logging.getLogger(__name__)


def _configure_logging(level: str) -> None:
    log_level = getattr(logging, level.upper(), logging.INFO)
    logging.basicConfig(
        level=log_level,
        format="%(levelname)s:%(name)s:%(message)s",
    )


def _parse_move(value: str) -> Tuple[str, Tuple[float, float]]:
    point_id, sep, coords = value.partition("=")
    parts = [part.strip() for part in coords.split(",")]
    if not sep or len(parts) != 2:
        raise argparse.ArgumentTypeError(f"expected pt-X=x,y, got {value!r}")
    try:
        x, y = float(parts[0]), float(parts[1])
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"bad coordinates in {value!r}") from exc
    point_id = point_id.strip()
    if not point_id.startswith("pt-"):
        point_id = f"pt-{point_id}"
    return point_id, (x, y)


def main(argv: Optional[Sequence[str]] = None) -> None:
    parser = argparse.ArgumentParser(description="Replay a Book I proposition and print its proof")
    parser.add_argument("prop_id", type=int, help="Proposition number, e.g. 2 for I.2")
    parser.add_argument(
        "--log-level",
        default="INFO",
        help="Logging level (default: INFO)",
    )
    parser.add_argument(
        "--move",
        action="append",
        type=_parse_move,
        default=[],
        metavar="pt-A=x,y",
        help="Drag a given point before replaying (repeatable)",
    )
    parser.add_argument(
        "--ghosts",
        action="store_true",
        help="List the ghost layers produced by macro steps",
    )
    parser.add_argument(
        "--validate-only",
        action="store_true",
        help="Only check the proposition definition",
    )
    args = parser.parse_args(argv)

    _configure_logging(args.log_level)

    prop = get_proposition(args.prop_id)
    if prop is None:
        logger.error("Unknown proposition I.%s", args.prop_id)
        raise SystemExit(1)

    try:
        ensure_valid_proposition_def(prop)
    except ValidationError as exc:
        logger.error("%s", exc)
        raise SystemExit(1) from exc
    logger.info("Definition of I.%d is well-formed", prop.id)
    if args.validate_only:
        print(f"I.{prop.id}: definition OK")
        return

    given = list(prop.given_elements)
    if args.move:
        moves: Dict[str, Tuple[float, float]] = dict(args.move)
        not_draggable: List[str] = [pid for pid in moves if pid not in prop.draggable_point_ids]
        if not_draggable or prop.compute_given_elements is None:
            logger.error("I.%d cannot drag %s", prop.id, ", ".join(not_draggable or sorted(moves)))
            raise SystemExit(1)
        positions = point_positions(given)
        positions.update(moves)
        given = prop.compute_given_elements(positions)

    result = replay_construction(given, prop.steps, prop)

    print(f"I.{prop.id}: {prop.title}")
    print(serialize_full_proof_state(result.state, result.proof_facts))
    print("\n=== Citations ===")
    print(serialize_citations(result.proof_facts))
    if args.ghosts:
        print("\n=== Ghost Layers ===")
        print(serialize_ghost_layers(result.ghost_layers))

    conclusion = describe_theorem_conclusion(prop, result.state)
    if conclusion:
        print(f"\nConclusion: {conclusion}")
    complete = result.steps_completed == len(prop.steps)
    print(f"\nSteps completed: {result.steps_completed}/{len(prop.steps)}")
    if not complete:
        logger.warning("Construction of I.%d broke down after %d step(s)", prop.id, result.steps_completed)


if __name__ == "__main__":
    main(sys.argv[1:])
