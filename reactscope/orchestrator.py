"""High-level orchestration for analyzing a project's components."""

from __future__ import annotations

import threading
from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, List, Optional, Sequence

from .analyzers.component import ComponentAnalyzer
from .analyzers.extractor import StructuralExtractor
from .analyzers.props import PropsProvider, ReactDocgenProvider
from .config import ReactScopeConfig, load_config
from .discovery import ComponentScanner, hash_file
from .errors import ReactScopeError
from .logging import get_logger, log_exception
from .models import AnalysisReport, ComponentInfo, SkippedFile
from .stores import ComponentCache

ProgressCallback = Callable[[int, int, str], None]


@dataclass
class _FileOutcome:
    path: Path
    key: str
    fingerprint: Optional[str]
    component: Optional[ComponentInfo] = None
    error: Optional[str] = None
    from_cache: bool = False


class Orchestrator:
    """Discovers component files under a root and analyzes each of them.

    Every file is analyzed independently; a failure in one file is reported
    in :attr:`AnalysisReport.skipped` and never stops the batch.
    """

    def __init__(
        self,
        *,
        scanner: ComponentScanner | None = None,
        props_provider: PropsProvider | None = None,
    ) -> None:
        self.scanner = scanner
        self.props_provider = props_provider
        self.logger = get_logger("orchestrator")

    def run(
        self,
        path: str | Path,
        *,
        max_workers: int | None = None,
        props: bool | None = None,
        use_cache: bool | None = None,
        progress: ProgressCallback | None = None,
        cancel_event: threading.Event | None = None,
    ) -> AnalysisReport:
        """Analyze every component file below ``path``."""
        root = Path(path).expanduser().resolve()
        config = load_config(root)
        self.logger.info("Starting component analysis for %s", root)

        scanner = self.scanner or ComponentScanner(config.exclude_paths)
        files = scanner.scan(root)
        self.logger.debug("Scanner discovered %d candidate files", len(files))

        analyzer = self.build_analyzer(root, config, props=props)
        cache_enabled = config.cache.enabled if use_cache is None else use_cache
        cache = ComponentCache.for_root(root) if cache_enabled else None
        workers = max_workers if max_workers is not None else config.analysis.max_workers

        report = self.analyze_files(
            analyzer,
            files,
            max_workers=workers,
            cache=cache,
            progress=progress,
            cancel_event=cancel_event,
        )

        if cache is not None:
            if not report.cancelled:
                cache.prune(analyzer.relative_path(file) for file in files)
            cache.persist()

        self.logger.info(
            "Analyzed %d files: %d components, %d skipped",
            len(files),
            len(report.components),
            len(report.skipped),
        )
        return report

    def build_analyzer(
        self, root: Path, config: ReactScopeConfig, *, props: bool | None = None
    ) -> ComponentAnalyzer:
        props_enabled = config.props.enabled if props is None else props
        provider: PropsProvider | None = None
        if props_enabled:
            provider = self.props_provider or ReactDocgenProvider(
                config.props.command, timeout=config.props.timeout
            )
        extractor = StructuralExtractor(dedupe_hooks=config.analysis.dedupe_hooks)
        return ComponentAnalyzer(root, extractor=extractor, props_provider=provider)

    def analyze_files(
        self,
        analyzer: ComponentAnalyzer,
        files: Sequence[Path],
        *,
        max_workers: int = 1,
        cache: ComponentCache | None = None,
        progress: ProgressCallback | None = None,
        cancel_event: threading.Event | None = None,
    ) -> AnalysisReport:
        """Analyze ``files`` sequentially or on a bounded thread pool."""
        report = AnalysisReport(root=str(analyzer.root))
        total = len(files)
        done = 0
        pending: List[_FileOutcome] = []

        for path in files:
            outcome = self._from_cache(analyzer, path, cache)
            if outcome.from_cache:
                done += 1
                self._collect(analyzer, report, outcome, None)
                if progress is not None:
                    progress(done, total, outcome.key)
            else:
                pending.append(outcome)

        if max_workers <= 1:
            for outcome in pending:
                if cancel_event is not None and cancel_event.is_set():
                    report.cancelled = True
                    break
                self._analyze_one(analyzer, outcome)
                done += 1
                self._collect(analyzer, report, outcome, cache)
                if progress is not None:
                    progress(done, total, outcome.key)
        else:
            with ThreadPoolExecutor(max_workers=max_workers) as executor:
                futures = {
                    executor.submit(self._analyze_one, analyzer, outcome): outcome
                    for outcome in pending
                }
                for future in as_completed(futures):
                    if future.cancelled():
                        continue
                    outcome = futures[future]
                    future.result()
                    done += 1
                    self._collect(analyzer, report, outcome, cache)
                    if progress is not None:
                        progress(done, total, outcome.key)
                    if cancel_event is not None and cancel_event.is_set() and not report.cancelled:
                        report.cancelled = True
                        for other in futures:
                            other.cancel()

        report.components.sort(key=lambda component: component.file_path)
        report.skipped.sort(key=lambda skipped: skipped.path)
        if report.cancelled:
            self.logger.info("Analysis cancelled after %d of %d files", done, total)
        return report

    # ------------------------------------------------------------------
    # Internal helpers

    def _from_cache(
        self, analyzer: ComponentAnalyzer, path: Path, cache: ComponentCache | None
    ) -> _FileOutcome:
        key = analyzer.relative_path(path)
        if cache is None:
            return _FileOutcome(path=path, key=key, fingerprint=None)
        try:
            fingerprint = hash_file(path)
        except OSError:
            return _FileOutcome(path=path, key=key, fingerprint=None)
        outcome = _FileOutcome(path=path, key=key, fingerprint=fingerprint)
        hit = cache.get(key, signature=analyzer.signature, fingerprint=fingerprint)
        if hit is not None:
            outcome.component = hit.component
            outcome.from_cache = True
        return outcome

    def _analyze_one(self, analyzer: ComponentAnalyzer, outcome: _FileOutcome) -> None:
        try:
            outcome.component = analyzer.analyze_file(outcome.path)
        except ReactScopeError as exc:
            log_exception(self.logger, f"Skipping {outcome.key}", exc)
            outcome.error = str(exc)
        except Exception as exc:  # one broken file must not abort the batch
            self.logger.error("Unexpected failure analyzing %s: %s", outcome.key, exc, exc_info=exc)
            outcome.error = f"{type(exc).__name__}: {exc}"

    def _collect(
        self,
        analyzer: ComponentAnalyzer,
        report: AnalysisReport,
        outcome: _FileOutcome,
        cache: ComponentCache | None,
    ) -> None:
        if outcome.error is not None:
            report.skipped.append(SkippedFile(path=outcome.key, reason=outcome.error))
            return
        if outcome.component is not None:
            report.components.append(outcome.component)
        if cache is not None and outcome.fingerprint is not None and not outcome.from_cache:
            cache.store(
                outcome.key,
                signature=analyzer.signature,
                fingerprint=outcome.fingerprint,
                component=outcome.component,
            )


__all__ = ["Orchestrator", "ProgressCallback"]
