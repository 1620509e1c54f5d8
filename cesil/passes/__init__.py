"""
Optimization Passes

Peephole passes over CESIL+ programs:
- Push/pop pair elimination
- NOP elimination with label migration
- Label chain collapsing (labelled NOP runs, with jump retargeting)
- Redundant label removal
"""

from .push_pop import (
    PushPopEliminationPass,
    strip_push_pop_pairs,
    strip_all_push_pop_pairs,
    strip_push_pop_pairs_to_fixed_point,
)
from .nop_elim import (
    NOPEliminationPass,
    strip_unlabelled_nops,
    strip_labelled_nops,
    strip_nops,
)
from .label_chains import LabelChainPass, collapse_label_chains
from .redundant_labels import RedundantLabelPass, strip_redundant_labels

__all__ = [
    'PushPopEliminationPass',
    'NOPEliminationPass',
    'LabelChainPass',
    'RedundantLabelPass',
    'strip_push_pop_pairs',
    'strip_all_push_pop_pairs',
    'strip_push_pop_pairs_to_fixed_point',
    'strip_unlabelled_nops',
    'strip_labelled_nops',
    'strip_nops',
    'collapse_label_chains',
    'strip_redundant_labels',
]
