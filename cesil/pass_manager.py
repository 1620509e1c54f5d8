"""
Pass Manager Infrastructure

Provides the framework for running optimization passes over CESIL+ programs.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Optional, Any, Sequence
import json

from .lang import Statement
from .analysis import get_labels, missing_labels


@dataclass
class PassConfig:
    """Configuration for a single pass."""
    name: str
    enabled: bool = True
    options: dict[str, Any] = field(default_factory=dict)


@dataclass
class PassMetrics:
    """Metrics collected by a pass during execution."""
    ir_size_before: int = 0
    ir_size_after: int = 0
    labels_before: int = 0
    labels_after: int = 0
    custom: dict[str, Any] = field(default_factory=dict)
    messages: list[str] = field(default_factory=list)


def count_statements(program: Sequence[Statement]) -> int:
    """Count statements in a program."""
    return len(program)


def count_labels(program: Sequence[Statement]) -> int:
    """Count label definitions (duplicates included)."""
    return len(get_labels(program))


class ProgramPass(ABC):
    """Base class for CESIL+ program -> program passes."""

    def __init__(self):
        self._metrics: Optional[PassMetrics] = None

    @property
    @abstractmethod
    def name(self) -> str:
        """Return the pass name for config matching."""
        pass

    @abstractmethod
    def run(self, program: Sequence[Statement], config: PassConfig) -> list[Statement]:
        """Transform a program and return a new one. Must not mutate the input."""
        pass

    def get_metrics(self) -> Optional[PassMetrics]:
        """Return metrics from the last run, if collected."""
        return self._metrics

    def _init_metrics(self, program: Sequence[Statement]):
        """Initialize metrics for a new run."""
        self._metrics = PassMetrics(
            ir_size_before=count_statements(program),
            labels_before=count_labels(program),
        )

    def _finish_metrics(self, program: Sequence[Statement]):
        """Record the size of the pass result."""
        if self._metrics:
            self._metrics.ir_size_after = count_statements(program)
            self._metrics.labels_after = count_labels(program)

    def _add_metric_message(self, msg: str):
        """Add a diagnostic message to metrics."""
        if self._metrics:
            self._metrics.messages.append(msg)


def parse_pass_configs(data: dict) -> dict[str, PassConfig]:
    """Build PassConfigs from {"passes": {name: {"enabled", "options"}}}."""
    configs: dict[str, PassConfig] = {}
    for pass_name, opts in data.get("passes", {}).items():
        configs[pass_name] = PassConfig(
            name=pass_name,
            enabled=opts.get("enabled", True),
            options=opts.get("options", {})
        )
    return configs


@dataclass
class PassManager:
    """Manages and runs program transformation passes.

    The pass list is run up to max_rounds times, stopping early once a round
    leaves the program unchanged.
    """
    passes: list[ProgramPass] = field(default_factory=list)
    config: dict[str, PassConfig] = field(default_factory=dict)
    print_after_all: bool = False
    print_metrics: bool = False
    verify: bool = True
    max_rounds: int = 1

    def add_pass(self, p: ProgramPass) -> None:
        """Register a pass."""
        self.passes.append(p)

    def set_config(self, data: dict) -> None:
        """Apply pass configs from an already-parsed JSON document."""
        self.config.update(parse_pass_configs(data))
        if "max_rounds" in data:
            self.max_rounds = int(data["max_rounds"])

    def load_config(self, config_path: str) -> None:
        """Load pass configs from JSON file."""
        with open(config_path) as f:
            data = json.load(f)
        self.set_config(data)

    def _print_pass_metrics(self, p: ProgramPass, cfg: PassConfig,
                            before_size: int, program: list[Statement]):
        """Print metrics for a pass execution."""
        after_size = count_statements(program)

        print(f"\n=== Pass: {p.name} ===")
        print(f"Config: {', '.join(f'{k}={v}' for k, v in cfg.options.items()) or '(default)'}")

        # IR size change
        if before_size > 0:
            pct = ((after_size - before_size) / before_size) * 100
            print(f"IR size: {before_size} -> {after_size} statements ({pct:+.0f}%)")
        else:
            print(f"IR size: {before_size} -> {after_size} statements")

        # Pass-specific metrics
        metrics = p.get_metrics()
        if metrics:
            print(f"Labels: {metrics.labels_before} -> {metrics.labels_after}")
            if metrics.custom:
                print(f"Custom metrics: {metrics.custom}")
            if metrics.messages:
                print("Diagnostics:")
                for msg in metrics.messages:
                    print(f"  - {msg}")

    def _verify(self, p: ProgramPass, before: Sequence[Statement],
                after: Sequence[Statement]) -> None:
        """Check that a pass kept every previously resolvable jump target."""
        defined_before = set(get_labels(before))
        broken = [label for label in missing_labels(after) if label in defined_before]
        if broken:
            raise RuntimeError(
                f"Pass '{p.name}' left jumps to undefined labels: {', '.join(broken)}"
            )

    def _run_round(self, program: list[Statement]) -> list[Statement]:
        """Run every enabled pass once."""
        from .printing import print_program

        for p in self.passes:
            cfg = self.config.get(p.name, PassConfig(name=p.name))
            if not cfg.enabled:
                if self.print_metrics:
                    print(f"\n=== Pass: {p.name} === (SKIPPED - disabled)")
                continue

            before_size = count_statements(program)

            result = p.run(program, cfg)

            if self.verify:
                self._verify(p, program, result)

            # Print metrics
            if self.print_metrics:
                self._print_pass_metrics(p, cfg, before_size, result)

            if self.print_after_all:
                print(f"=== Program (after {p.name}) ===")
                print_program(result)

            program = result

        return program

    def run(self, program: Sequence[Statement]) -> list[Statement]:
        """Run all enabled passes in order, repeating up to max_rounds times."""
        from .printing import print_program

        program = list(program)
        if self.print_after_all:
            print("=== Program (before passes) ===")
            print_program(program)

        for round_num in range(1, max(self.max_rounds, 1) + 1):
            if self.max_rounds > 1 and self.print_metrics:
                print(f"\n##### Round {round_num} #####")
            result = self._run_round(program)
            if result == program:
                break
            program = result

        return program
