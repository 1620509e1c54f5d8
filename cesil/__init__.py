"""
CESIL+ Program Analysis and Peephole Optimization

- lang:     closed instruction model (Instruction, Labelled)
- analysis: label/reference queries and diagnostics
- passes:   push/pop elimination, NOP elimination with label migration,
            label chain collapsing, redundant label removal

Optimization pipeline: redundant-labels -> push-pop -> nop-elim -> label-chains
"""

# Instruction model
from .lang import (
    Label,
    Opcode,
    ZERO_OPERAND_OPCODES,
    DATA_OPCODES,
    JUMP_OPCODES,
    REF_MARKER,
    Val,
    Var,
    Instruction,
    Labelled,
    Statement,
    Program,
    is_labelled,
    unwrap,
    label_of,
    is_jump,
    jump_target,
)

# Builder
from .builder import ProgramBuilder

# Analysis
from .analysis import (
    filter_labelled,
    filter_unlabelled,
    strip_labels,
    get_labels,
    get_label_refs,
    redundant_labels,
    missing_labels,
    duplicate_labels,
    index_program,
    make_label_index_map,
    strip_ref_marker,
    kind_name,
    list_statement_types_used,
    ProgramDiagnostics,
    diagnose,
)

# Pass infrastructure
from .pass_manager import (
    PassConfig,
    PassMetrics,
    ProgramPass,
    PassManager,
    count_statements,
    count_labels,
)

# Passes
from .passes import (
    PushPopEliminationPass,
    NOPEliminationPass,
    LabelChainPass,
    RedundantLabelPass,
    strip_push_pop_pairs,
    strip_all_push_pop_pairs,
    strip_push_pop_pairs_to_fixed_point,
    strip_unlabelled_nops,
    strip_labelled_nops,
    strip_nops,
    collapse_label_chains,
    strip_redundant_labels,
)

# Main entry point
from .optimize import build_pipeline, optimize_program

# Printing utilities
from .printing import format_instruction, format_statement, format_program, print_program, print_diagnostics


__all__ = [
    # Instruction model
    'Label', 'Opcode', 'ZERO_OPERAND_OPCODES', 'DATA_OPCODES', 'JUMP_OPCODES', 'REF_MARKER',
    'Val', 'Var', 'Instruction', 'Labelled', 'Statement', 'Program',
    'is_labelled', 'unwrap', 'label_of', 'is_jump', 'jump_target',
    # Builder
    'ProgramBuilder',
    # Analysis
    'filter_labelled', 'filter_unlabelled', 'strip_labels', 'get_labels', 'get_label_refs',
    'redundant_labels', 'missing_labels', 'duplicate_labels', 'index_program',
    'make_label_index_map', 'strip_ref_marker', 'kind_name', 'list_statement_types_used',
    'ProgramDiagnostics', 'diagnose',
    # Pass infrastructure
    'PassConfig', 'PassMetrics', 'ProgramPass', 'PassManager', 'count_statements', 'count_labels',
    # Passes
    'PushPopEliminationPass', 'NOPEliminationPass', 'LabelChainPass', 'RedundantLabelPass',
    'strip_push_pop_pairs', 'strip_all_push_pop_pairs', 'strip_push_pop_pairs_to_fixed_point',
    'strip_unlabelled_nops', 'strip_labelled_nops', 'strip_nops',
    'collapse_label_chains', 'strip_redundant_labels',
    # Optimization
    'build_pipeline', 'optimize_program',
    # Printing
    'format_instruction', 'format_statement', 'format_program', 'print_program', 'print_diagnostics',
]
