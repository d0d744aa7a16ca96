"""Strategy registry: dispatches detection requests to editor strategies.

The ``StrategyRegistry`` holds an immutable, ordered tuple of strategies and
a process source. It snapshots the process table once per request, filters
it with each strategy's identity predicate, and hands the matching
processes to the strategy's ``extract``.

Dispatch Algorithm
------------------
``detect(kind)``:

1. No registered strategy for ``kind`` -> ``UnsupportedEditor``.
2. No process matches -> ``NoProcessFound``.
3. Otherwise the strategy's outcome (or its ``WindowParseError``).

``auto_detect()`` tries strategies in registration order. The first one
whose predicate matches some process and whose extraction succeeds wins.
If several matched and all failed, the first failure is re-raised; if none
matched, ``NoProcessFound("any supported editor")``.

``default_registry()`` is the composition root: it builds every strategy
from the static editor profiles and the configured search directories.
"""

from __future__ import annotations

import logging
from typing import Iterable

from idefiles.config import DetectorConfig
from idefiles.editors import (
    EDITOR_PROFILES,
    FAMILY_JETBRAINS,
    FAMILY_TERMINAL,
    FAMILY_VSCODE,
    EditorKind,
)
from idefiles.evidence.project_locator import ProjectLocator
from idefiles.evidence.vscode_session import VSCodeSessionReader
from idefiles.exceptions import DetectionError, NoProcessFound, UnsupportedEditor
from idefiles.models import DetectionOutcome, ProcessSnapshot
from idefiles.processes import ProcessSource, PsutilProcessSource
from idefiles.strategies import (
    EditorStrategy,
    JetBrainsStrategy,
    TerminalEditorStrategy,
    VSCodeStrategy,
)

logger = logging.getLogger(__name__)

ANY_EDITOR = "any supported editor"


class StrategyRegistry:
    """Ordered, immutable collection of editor strategies.

    Attributes:
        strategies: Registered strategies in registration order.
        process_source: Where process snapshots come from.
    """

    def __init__(self, strategies: Iterable[EditorStrategy], process_source: ProcessSource) -> None:
        self._strategies: tuple[EditorStrategy, ...] = tuple(strategies)
        self.process_source = process_source

    @property
    def strategies(self) -> tuple[EditorStrategy, ...]:
        return self._strategies

    def strategy_for(self, kind: EditorKind) -> EditorStrategy | None:
        for strategy in self._strategies:
            if strategy.kind is kind:
                return strategy
        return None

    def supported_editors(self) -> list[str]:
        """Display names of registered editors, in registration order."""
        return [strategy.display_name for strategy in self._strategies]

    def supported_kinds(self) -> list[EditorKind]:
        return [strategy.kind for strategy in self._strategies]

    def detect(self, kind: EditorKind) -> DetectionOutcome:
        """Detect the open files of one editor.

        Raises:
            UnsupportedEditor: If no strategy handles ``kind``.
            NoProcessFound: If no process belongs to the editor.
            WindowParseError: If processes were found but no file.
            SystemApiError: If the process table cannot be read.
        """
        strategy = self.strategy_for(kind)
        if strategy is None:
            raise UnsupportedEditor(kind.display_name)

        processes = self.process_source.list_processes()
        matched = [process for process in processes if strategy.matches(process)]
        if not matched:
            raise NoProcessFound(strategy.display_name)

        logger.debug("%s: %d matching processes", strategy.display_name, len(matched))
        return strategy.extract(matched)

    def auto_detect(self) -> DetectionOutcome:
        """Detect the open files of the first running supported editor.

        Raises:
            NoProcessFound: If no supported editor is running.
            DetectionError: The first strategy failure, when every running
                editor failed.
        """
        processes = self.process_source.list_processes()
        first_failure: DetectionError | None = None
        for strategy in self._strategies:
            matched = [process for process in processes if strategy.matches(process)]
            if not matched:
                continue
            logger.debug("%s: %d matching processes", strategy.display_name, len(matched))
            try:
                return strategy.extract(matched)
            except DetectionError as exc:
                logger.debug("%s: %s", strategy.display_name, exc)
                if first_failure is None:
                    first_failure = exc

        if first_failure is not None:
            raise first_failure
        raise NoProcessFound(ANY_EDITOR)

    def matching_processes(self) -> list[tuple[ProcessSnapshot, EditorStrategy]]:
        """Pair every process with the first strategy that claims it."""
        pairs: list[tuple[ProcessSnapshot, EditorStrategy]] = []
        for process in self.process_source.list_processes():
            for strategy in self._strategies:
                if strategy.matches(process):
                    pairs.append((process, strategy))
                    break
        return pairs


def build_strategies(config: DetectorConfig) -> list[EditorStrategy]:
    """Build one strategy per detectable editor profile, in profile order."""
    locator = ProjectLocator(config.project_roots)
    session_reader = VSCodeSessionReader(config.session_storage_dirs)

    strategies: list[EditorStrategy] = []
    for profile in EDITOR_PROFILES:
        if profile.family == FAMILY_JETBRAINS:
            strategies.append(JetBrainsStrategy(profile, locator))
        elif profile.family == FAMILY_VSCODE:
            strategies.append(VSCodeStrategy(profile, session_reader))
        elif profile.family == FAMILY_TERMINAL:
            strategies.append(TerminalEditorStrategy(profile))
    return strategies


def default_registry(
    config: DetectorConfig | None = None,
    process_source: ProcessSource | None = None,
) -> StrategyRegistry:
    """Create a StrategyRegistry with every built-in strategy.

    Registration order: GoLand, PyCharm, IntelliJ IDEA, WebStorm, PhpStorm,
    RubyMine, CLion, Visual Studio Code, Vim, Nano. GUI IDEs therefore win
    over terminal editors during auto-detection.

    Args:
        config: Search directories. Defaults to ``DetectorConfig.defaults()``.
        process_source: Defaults to a ``PsutilProcessSource``.
    """
    return StrategyRegistry(
        build_strategies(config or DetectorConfig.defaults()),
        process_source or PsutilProcessSource(),
    )
