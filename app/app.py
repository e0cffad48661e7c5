"""
Session orchestration for the teacher-performance filter.

    load_snapshot()              load teacherData once → tuple[Record, ...]
    run_query(snapshot, criteria) apply filters + render → ResultView

The snapshot is a read-only tuple shared by every query of the session;
criteria are rebuilt for each "apply filters" action and discarded after.

Logs each query and wall-clock time to stdout and logs/app.log.
"""

import logging
import time
from collections.abc import Sequence

from app import settings
from etl import normalize
from etl.pipeline import run as run_pipeline
from frontend.render import ResultView, render_results
from search.filters import apply_filters
from search.records import FilterCriteria, Record

log = logging.getLogger("app")


def configure_normalizer() -> None:
    """Install extra section aliases from SECTION_ALIASES_FILE, if set."""
    path = settings.alias_file()
    if path is None:
        return
    extra = normalize.load_alias_file(path)
    normalize.configure(extra)
    log.info("Loaded %d extra section alias groups from %s", len(extra), path)


def load_snapshot(source: str | None = None) -> tuple[Record, ...]:
    log.info("Loading teacher data…")
    configure_normalizer()
    snapshot = tuple(run_pipeline(source))
    log.info("  %d records loaded.", len(snapshot))
    return snapshot


def run_query(
    snapshot: Sequence[Record],
    criteria: FilterCriteria,
    current_year: int | None = None,
) -> ResultView:
    t0 = time.perf_counter()
    log.info("Applying filters: %s", criteria.model_dump(mode="json"))

    matches = apply_filters(snapshot, criteria, current_year)

    elapsed = time.perf_counter() - t0
    log.info("hits=%d/%d  %.3fs", len(matches), len(snapshot), elapsed)
    return render_results(matches)
