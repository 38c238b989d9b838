from .types import (
    BYRNE_BLUE,
    BYRNE_CYCLE,
    BYRNE_GIVEN,
    BYRNE_RED,
    BYRNE_YELLOW,
    CircleSelector,
    CompassAction,
    ConstructionCircle,
    ConstructionPoint,
    ConstructionSegment,
    ConstructionState,
    GhostCircle,
    GhostLayer,
    GhostPoint,
    GhostSegment,
    GivenAngleFact,
    GivenFact,
    IntersectionAction,
    IntersectionCandidate,
    MacroAction,
    PropositionDef,
    PropositionStep,
    ResultSegment,
    SegmentSelector,
    StraightedgeAction,
    describe_theorem_conclusion,
    needs_extended_segments,
    point_positions,
)
from .config import EngineConfig, get_engine_config, set_engine_config
from .construction import (
    add_circle,
    add_point,
    add_segment,
    create_initial_state,
    get_all_circles,
    get_all_points,
    get_all_segments,
    get_circle,
    get_point,
    get_radius,
    get_segment,
    initialize_given,
    label_at,
    skip_point_label,
)
from .intersections import TOLERANCE, find_new_intersections, is_candidate_beyond_point
from .selectors import find_matching_candidate, resolve_selector, select_default_candidate
from .facts import (
    AngleEqualityFact,
    AngleMeasure,
    DistancePair,
    EqualityFact,
    ProofFact,
    angle_measure,
    distance_pair,
    format_citation,
    is_angle_fact,
)
from .fact_store import (
    FactStore,
    add_angle_fact,
    add_fact,
    create_fact_store,
    facts_up_to_step,
    get_equal_angles,
    get_equal_distances,
    query_angle_equality,
    query_equality,
    rebuild_fact_store,
    root_fact_id,
)
from .derivation import derive_def15_facts
from .macros import MACRO_REGISTRY, MacroDef, MacroResult, get_macro
from .propositions import PROP_REGISTRY, get_proposition
from .ghost import compute_macro_ghost
from .replay import (
    CirclePostAction,
    IntersectionPostAction,
    PostCompletionAction,
    ReplayResult,
    SegmentPostAction,
    replay_construction,
)
from .snapshots import (
    RestoredSession,
    Snapshot,
    SnapshotStack,
    capture_snapshot,
    delete_last_step,
    push_snapshot,
    rewind_to_step,
)
from .validate import (
    DefinitionError,
    ValidationError,
    ensure_valid_proposition_def,
    validate_proposition_def,
    validate_step,
)
from .serialize import (
    serialize_citations,
    serialize_construction_state,
    serialize_full_proof_state,
    serialize_ghost_layers,
    serialize_proof_facts,
)

__all__ = [
    'BYRNE_BLUE',
    'BYRNE_CYCLE',
    'BYRNE_GIVEN',
    'BYRNE_RED',
    'BYRNE_YELLOW',
    'CircleSelector',
    'CompassAction',
    'ConstructionCircle',
    'ConstructionPoint',
    'ConstructionSegment',
    'ConstructionState',
    'GhostCircle',
    'GhostLayer',
    'GhostPoint',
    'GhostSegment',
    'GivenAngleFact',
    'GivenFact',
    'IntersectionAction',
    'IntersectionCandidate',
    'MacroAction',
    'PropositionDef',
    'PropositionStep',
    'ResultSegment',
    'SegmentSelector',
    'StraightedgeAction',
    'describe_theorem_conclusion',
    'needs_extended_segments',
    'point_positions',
    'EngineConfig',
    'get_engine_config',
    'set_engine_config',
    'add_circle',
    'add_point',
    'add_segment',
    'create_initial_state',
    'get_all_circles',
    'get_all_points',
    'get_all_segments',
    'get_circle',
    'get_point',
    'get_radius',
    'get_segment',
    'initialize_given',
    'label_at',
    'skip_point_label',
    'TOLERANCE',
    'find_new_intersections',
    'is_candidate_beyond_point',
    'find_matching_candidate',
    'resolve_selector',
    'select_default_candidate',
    'AngleEqualityFact',
    'AngleMeasure',
    'DistancePair',
    'EqualityFact',
    'ProofFact',
    'angle_measure',
    'distance_pair',
    'format_citation',
    'is_angle_fact',
    'FactStore',
    'add_angle_fact',
    'add_fact',
    'create_fact_store',
    'facts_up_to_step',
    'get_equal_angles',
    'get_equal_distances',
    'query_angle_equality',
    'query_equality',
    'rebuild_fact_store',
    'root_fact_id',
    'derive_def15_facts',
    'MACRO_REGISTRY',
    'MacroDef',
    'MacroResult',
    'get_macro',
    'PROP_REGISTRY',
    'get_proposition',
    'compute_macro_ghost',
    'CirclePostAction',
    'IntersectionPostAction',
    'PostCompletionAction',
    'ReplayResult',
    'SegmentPostAction',
    'replay_construction',
    'RestoredSession',
    'Snapshot',
    'SnapshotStack',
    'capture_snapshot',
    'delete_last_step',
    'push_snapshot',
    'rewind_to_step',
    'DefinitionError',
    'ValidationError',
    'ensure_valid_proposition_def',
    'validate_proposition_def',
    'validate_step',
    'serialize_citations',
    'serialize_construction_state',
    'serialize_full_proof_state',
    'serialize_ghost_layers',
    'serialize_proof_facts',
]
