"""
Main Optimization Entry Point

Provides the optimize_program function that runs the default peephole
pipeline over a CESIL+ program using the PassManager.
"""

import json
import os
from typing import Optional, Sequence

from .lang import Statement
from .pass_manager import PassManager
from .passes import (
    RedundantLabelPass, PushPopEliminationPass, NOPEliminationPass, LabelChainPass,
)

DEFAULT_CONFIG_PATH = os.path.join(os.path.dirname(__file__), "pass_config.json")


def build_pipeline(
    print_after_all: bool = False,
    print_metrics: bool = False,
    config_path: Optional[str] = None,
) -> PassManager:
    """Create the default pass pipeline.

    Options come from cesil/pass_config.json, with config_path (if given)
    applied on top.
    """
    with open(DEFAULT_CONFIG_PATH) as f:
        config_data = json.load(f)

    pm = PassManager(print_after_all=print_after_all, print_metrics=print_metrics)
    pm.set_config(config_data)
    if config_path:
        pm.load_config(config_path)

    pm.add_pass(RedundantLabelPass())       # frees NOPs held by dead labels
    pm.add_pass(PushPopEliminationPass())   # may leave labelled NOPs behind
    pm.add_pass(NOPEliminationPass())       # unlabelled first, then label migration
    pm.add_pass(LabelChainPass())           # labelled NOP runs left by nop-elim
    return pm


def optimize_program(
    program: Sequence[Statement],
    print_after_all: bool = False,
    print_metrics: bool = False,
    config_path: Optional[str] = None,
) -> list[Statement]:
    """
    Run the peephole pipeline over a program.

    Args:
        program: The program to optimize (left unmodified)
        print_after_all: If True, print the program after each pass
        print_metrics: If True, print pass metrics and diagnostics
        config_path: JSON pass config applied over cesil/pass_config.json

    Returns:
        The optimized program
    """
    pm = build_pipeline(print_after_all, print_metrics, config_path)
    return pm.run(program)
