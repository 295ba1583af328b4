"""Evaluation analytics - monthly averages, cross-tabulation and chart vectors.

Everything here is a pure function over `EvaluationRecord` lists so the same
code serves the API and the tests. Months are zero-padded ``YYYY-MM`` strings,
which makes lexicographic order chronological.
"""

import calendar
import math
from collections import defaultdict
from datetime import datetime, timezone
from decimal import ROUND_HALF_UP, Decimal
from typing import Iterable, Sequence

from intradesk.schemas.analytics import (
    NO_DATA,
    AnalyticsReport,
    Comment,
    CommentPage,
    CrossTab,
    CrossTabAverages,
    CrossTabRow,
    EvaluationRecord,
    FilterOptions,
    MonthlySummary,
    Radar,
    RadarIndicator,
    Trend,
    TrendSeries,
)
from intradesk.schemas.evaluation import (
    EVALUATION_ITEMS,
    ITEM_KEYS,
    ITEM_LABELS,
    ITEM_MAX,
    MAX_TOTAL_SCORE,
)

# Items scored out of 10 are halved for charts so every axis spans 0-5
CHART_SCALE_MAX = 5
NO_COMMENT = "No comment."
_EPOCH = datetime.min.replace(tzinfo=timezone.utc)


def round1(value: float) -> float:
    """Round half-up to one decimal place."""
    return float(Decimal(repr(value)).quantize(Decimal("0.1"), rounding=ROUND_HALF_UP))


def chart_scale(key: str, value: float) -> float:
    max_score = ITEM_MAX[key]
    return value * CHART_SCALE_MAX / max_score if max_score > CHART_SCALE_MAX else value


def month_label(month: str, long: bool = True) -> str:
    """'2025-10' -> 'October 2025' (long) or 'Oct' (short). Malformed input is returned as-is."""
    try:
        year, num = month.split("-")
        name = calendar.month_name[int(num)] if long else calendar.month_abbr[int(num)]
    except (ValueError, IndexError):
        return month
    return f"{name} {year}" if long else name


def distinct_months(records: Iterable[EvaluationRecord]) -> list[str]:
    """Unique months, most recent first."""
    return sorted({r.month for r in records}, reverse=True)


def select_month(
    months: Sequence[str], month: str | None = None, month_index: int = 0
) -> str | None:
    """Pick the reporting month: an explicit month wins, else index into `months`."""
    if month:
        return month
    if 0 <= month_index < len(months):
        return months[month_index]
    return None


def percentage_average(totals: Sequence[int]) -> str:
    """Mean total as a percentage of the maximum, one decimal, '0.0' when empty."""
    if not totals:
        return "0.0"
    mean = sum(totals) / len(totals)
    return f"{round1(mean / MAX_TOTAL_SCORE * 100):.1f}"


def _submitted_key(record: EvaluationRecord) -> datetime:
    ts = record.submitted_at
    if ts is None:
        return _EPOCH
    return ts if ts.tzinfo else ts.replace(tzinfo=timezone.utc)


def _latest_by_evaluator(records: Iterable[EvaluationRecord]) -> dict[str, EvaluationRecord]:
    latest: dict[str, EvaluationRecord] = {}
    for record in sorted(records, key=_submitted_key):
        latest[record.evaluator_name] = record
    return latest


def _item_means(records: Sequence[EvaluationRecord]) -> dict[str, float]:
    count = len(records)
    return {
        key: sum(r.scores.get(key, 0) for r in records) / count if count else 0.0
        for key in ITEM_KEYS
    }


def build_cross_tab(month_records: Iterable[EvaluationRecord], evaluators: Sequence[str]) -> CrossTab:
    """
    One row per potential evaluator, in the given order.
    Non-submitters get NO_DATA cells and are left out of the average row.
    """
    latest = _latest_by_evaluator(month_records)
    rows: list[CrossTabRow] = []
    submitted: list[EvaluationRecord] = []
    for name in evaluators:
        record = latest.get(name)
        if record is None:
            rows.append(
                CrossTabRow(
                    evaluator=name,
                    submitted=False,
                    scores={key: NO_DATA for key in ITEM_KEYS},
                    total_score=NO_DATA,
                )
            )
            continue
        submitted.append(record)
        rows.append(
            CrossTabRow(
                evaluator=name,
                submitted=True,
                scores={key: record.scores.get(key, 0) for key in ITEM_KEYS},
                total_score=record.total_score,
            )
        )

    n = len(submitted)
    if n:
        means = _item_means(submitted)
        averages = CrossTabAverages(
            scores={key: round1(means[key]) for key in ITEM_KEYS},
            total_score=round1(sum(r.total_score for r in submitted) / n),
        )
    else:
        averages = CrossTabAverages(
            scores={key: NO_DATA for key in ITEM_KEYS},
            total_score=NO_DATA,
        )

    return CrossTab(
        headers=["Evaluator", *(ITEM_LABELS[k] for k in ITEM_KEYS), "Total"],
        item_keys=list(ITEM_KEYS),
        rows=rows,
        averages=averages,
        submitted_count=n,
    )


def paginate_comments(
    month_records: Iterable[EvaluationRecord], page: int = 0, per_page: int = 1
) -> CommentPage:
    """Zero-based page of comments in submission order; `page` is clamped."""
    per_page = max(per_page, 1)
    comments = [
        Comment(evaluator=r.evaluator_name, comment=r.comment or NO_COMMENT)
        for r in sorted(month_records, key=_submitted_key)
    ]
    total = len(comments)
    total_pages = math.ceil(total / per_page)
    page = min(max(page, 0), max(total_pages - 1, 0))
    start = page * per_page
    return CommentPage(
        items=comments[start:start + per_page],
        page=page,
        per_page=per_page,
        total=total,
        total_pages=total_pages,
    )


def radar_vector(item_averages: dict[str, float | str]) -> list[float]:
    """Item averages in item order on the common chart scale; NO_DATA counts as 0."""
    vector = []
    for key in ITEM_KEYS:
        value = item_averages.get(key, 0)
        value = 0.0 if value == NO_DATA else float(value)
        vector.append(round1(chart_scale(key, value)))
    return vector


def _by_month(records: Iterable[EvaluationRecord]) -> dict[str, list[EvaluationRecord]]:
    by_month: dict[str, list[EvaluationRecord]] = defaultdict(list)
    for record in records:
        by_month[record.month].append(record)
    return by_month


def monthly_summaries(records: Iterable[EvaluationRecord]) -> list[MonthlySummary]:
    """Per-month averages in chronological order."""
    by_month = _by_month(records)

    summaries = []
    for month in sorted(by_month):
        group = by_month[month]
        totals = [r.total_score for r in group]
        means = _item_means(group)
        summaries.append(
            MonthlySummary(
                month=month,
                label=month_label(month, long=False),
                count=len(group),
                total_score=round1(sum(totals) / len(totals)),
                percentage=percentage_average(totals),
                item_averages={key: round1(means[key]) for key in ITEM_KEYS},
            )
        )
    return summaries


def trend_series(records: Iterable[EvaluationRecord]) -> Trend:
    """Chronological per-item chart series, scaled then rounded once."""
    by_month = _by_month(records)
    months = sorted(by_month)
    means = [_item_means(by_month[m]) for m in months]
    return Trend(
        labels=[month_label(m, long=False) for m in months],
        series=[
            TrendSeries(
                key=key,
                label=ITEM_LABELS[key],
                data=[round1(chart_scale(key, month_means[key])) for month_means in means],
            )
            for key in ITEM_KEYS
        ],
    )


def radar_indicator() -> list[RadarIndicator]:
    return [RadarIndicator(name=item.label, max=CHART_SCALE_MAX) for item in EVALUATION_ITEMS]


def build_report(
    target_records: Sequence[EvaluationRecord],
    evaluators: Sequence[str],
    targets: Sequence[str],
    target: str | None,
    month: str | None = None,
    month_index: int = 0,
    comment_page: int = 0,
    comments_per_page: int = 1,
) -> AnalyticsReport:
    """Assemble the analytics payload for one target and one month.

    `target_records` holds every evaluation of `target` across all months;
    `evaluators` are the potential evaluators in display order.
    """
    months = distinct_months(target_records)
    selected = select_month(months, month, month_index) if target else None
    month_records = [r for r in target_records if r.month == selected]

    cross_tab = build_cross_tab(month_records, evaluators if selected else [])
    summaries = monthly_summaries(target_records)

    # radar values are rounded once, after scaling
    latest = _latest_by_evaluator(month_records)
    submitted = [latest[name] for name in evaluators if name in latest] if selected else []
    current = radar_vector(_item_means(submitted)) if submitted else []
    cumulative = radar_vector(_item_means(target_records)) if target_records else []

    return AnalyticsReport(
        target=target,
        selected_month=selected,
        selected_month_label=month_label(selected) if selected else "",
        filter_options=FilterOptions(months=months, targets=sorted(targets)),
        cross_tab=cross_tab,
        comments=paginate_comments(month_records, comment_page, comments_per_page),
        monthly_summary=summaries,
        trend=trend_series(target_records),
        radar=Radar(indicator=radar_indicator(), current=current, cumulative=cumulative),
        current_month_average=percentage_average([r.total_score for r in month_records]),
        cumulative_average=percentage_average([r.total_score for r in target_records]),
    )
