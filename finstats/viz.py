"""Visualization utilities for the stats dashboard."""

from __future__ import annotations

from collections.abc import Iterable, Mapping

import plotly.express as px
import plotly.graph_objects as go

from . import utils

INCOME_COLOR = "#10b981"
EXPENSE_COLOR = "#ef4444"
MUTED_COLOR = "#8B9BB4"
CATEGORY_COLORS = (
    "#ef4444",
    "#f59e0b",
    "#10b981",
    "#3b82f6",
    "#8b5cf6",
    "#ec4899",
    "#06b6d4",
    "#84cc16",
    "#cf1124",
)


def _empty_figure(message: str) -> go.Figure:
    fig = go.Figure()
    fig.add_annotation(
        text=message,
        showarrow=False,
        x=0.5,
        y=0.5,
        xref="paper",
        yref="paper",
        font=dict(size=14, color=MUTED_COLOR),
    )
    fig.update_layout(margin=dict(l=0, r=0, t=20, b=20))
    return fig


def _dark_layout(fig: go.Figure) -> go.Figure:
    fig.update_layout(
        paper_bgcolor="rgba(0,0,0,0)",
        plot_bgcolor="rgba(0,0,0,0)",
        font=dict(color=MUTED_COLOR, size=11),
        hoverlabel=dict(bgcolor="#151F32", font_color="#ffffff"),
    )
    return fig


def plot_weekly_trend(weekly: Iterable[Mapping[str, object]]) -> go.Figure:
    """Income and expense areas for the week, oldest day on the left."""

    df = utils.ensure_dataframe(weekly)
    if df.empty:
        return _empty_figure("Hozircha ma'lumot yo'q")

    fig = go.Figure()
    for column, label, color, fill in (
        ("income", "Kirim", INCOME_COLOR, "rgba(16,185,129,0.3)"),
        ("expense", "Chiqim", EXPENSE_COLOR, "rgba(239,68,68,0.3)"),
    ):
        fig.add_trace(
            go.Scatter(
                name=label,
                x=df["name"],
                y=df[column],
                mode="lines",
                line=dict(color=color, width=3, shape="spline"),
                fill="tozeroy",
                fillcolor=fill,
                customdata=[utils.format_full(value) for value in df[column]],
                hovertemplate="%{customdata} " + utils.CURRENCY + "<extra>%{fullData.name}</extra>",
            )
        )

    top = float(df[["income", "expense"]].to_numpy().max())
    ticks = [top * step / 4 for step in range(5)] if top > 0 else [0]
    fig.update_yaxes(
        tickvals=ticks,
        ticktext=[utils.format_compact(tick) for tick in ticks],
        gridcolor="rgba(255,255,255,0.05)",
        griddash="dash",
        zeroline=False,
    )
    fig.update_xaxes(showgrid=False)
    fig.update_layout(
        showlegend=False,
        height=240,
        margin=dict(l=0, r=0, t=10, b=0),
    )
    return _dark_layout(fig)


def plot_category_donut(breakdown: Iterable[Mapping[str, object]]) -> go.Figure:
    data = list(breakdown)
    if not data:
        return _empty_figure("Hozircha ma'lumot yo'q")

    df = utils.ensure_dataframe(data)
    fig = px.pie(
        df,
        names="category",
        values="value",
        hole=0.6,
        color_discrete_sequence=list(CATEGORY_COLORS),
    )
    fig.update_traces(
        sort=False,
        textinfo="none",
        customdata=[utils.format_full(value) for value in df["value"]],
        hovertemplate="%{label}: %{customdata} " + utils.CURRENCY + "<extra></extra>",
        marker=dict(line=dict(width=0)),
    )
    fig.update_layout(
        height=260,
        margin=dict(l=0, r=0, t=10, b=0),
        legend=dict(orientation="h", yanchor="top", y=-0.05, xanchor="center", x=0.5),
    )
    return _dark_layout(fig)
