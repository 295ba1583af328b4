"""Evaluation analytics schemas."""

from datetime import datetime

from pydantic import AliasChoices, BaseModel, Field

NO_DATA = "-"


class EvaluationRecord(BaseModel):
    """Input row for aggregation."""

    model_config = {"from_attributes": True}

    evaluator_name: str
    target_employee_name: str = ""
    month: str = Field(validation_alias=AliasChoices("month", "evaluation_month"))
    scores: dict[str, int] = Field(validation_alias=AliasChoices("scores", "scores_json"))
    total_score: int
    comment: str | None = None
    submitted_at: datetime | None = None


class CrossTabRow(BaseModel):
    evaluator: str
    submitted: bool
    scores: dict[str, int | str]
    total_score: int | str


class CrossTabAverages(BaseModel):
    label: str = "Average"
    scores: dict[str, float | str]
    total_score: float | str


class CrossTab(BaseModel):
    headers: list[str]
    item_keys: list[str]
    rows: list[CrossTabRow]
    averages: CrossTabAverages
    submitted_count: int


class Comment(BaseModel):
    evaluator: str
    comment: str


class CommentPage(BaseModel):
    items: list[Comment]
    page: int
    per_page: int
    total: int
    total_pages: int


class MonthlySummary(BaseModel):
    month: str
    label: str
    count: int
    total_score: float
    percentage: str
    item_averages: dict[str, float]


class TrendSeries(BaseModel):
    key: str
    label: str
    data: list[float]


class Trend(BaseModel):
    labels: list[str]
    series: list[TrendSeries]


class RadarIndicator(BaseModel):
    name: str
    max: float


class Radar(BaseModel):
    indicator: list[RadarIndicator]
    current: list[float]
    cumulative: list[float]


class FilterOptions(BaseModel):
    months: list[str]
    targets: list[str]


class AnalyticsReport(BaseModel):
    """GET /v1/analytics/evaluations response."""

    target: str | None
    selected_month: str | None
    selected_month_label: str
    filter_options: FilterOptions
    cross_tab: CrossTab
    comments: CommentPage
    monthly_summary: list[MonthlySummary]
    trend: Trend
    radar: Radar
    current_month_average: str
    cumulative_average: str
