import altair as alt
import pandas as pd
import plotly.graph_objects as go

from sleeplog.timeline import STATE_LABELS, SLOTS_PER_DAY, SleepState

WEEKDAYS = ["Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday"]

# Both indexed by SleepState value
LEGEND_LABELS = [STATE_LABELS[s] for s in SleepState]
STATE_COLORS = ["#f7efee", "#f1918d", "#d6003d", "#9bbc8b"]

_DAY_LABEL_EXPR = "date(datum.value) == 1 ? timeFormat(datum.value, '%b %-d') : timeFormat(datum.value, '%-d')"


# Helper to format minutes as "Xh YYm"
def fmt_hm_from_minutes(m: float) -> str:
    m = int(round(m))
    hh = m // 60
    mm = m % 60
    return f"{hh}h {mm:02d}m"


def format_tick(slot: int) -> str:
    """Axis label for a quarter-hour slot: whole hours only, 12-hour clock."""
    if slot % 4 != 0:
        return ""
    hour = slot // 4
    if hour == 0:
        return "12 AM"
    if hour == 12:
        return "12 PM"
    if hour > 12:
        hour -= 12
    return str(hour)


# Axis labels are rendered client side, so spell format_tick out as a Vega expression
_TICK_LABEL_EXPR = " : ".join(
    f"datum.value == {slot} ? '{format_tick(slot)}'" for slot in range(0, SLOTS_PER_DAY, 4)
) + " : ''"


def _no_data_chart(msg: str = "No data"):
    return alt.Chart(pd.DataFrame({"msg": [msg]})).mark_text(size=16).encode(text="msg:N")


def sleep_heatmap(df: pd.DataFrame, width: int | str = "container", row_height: int = 25):
    """
    Calendar heatmap of a sleep timeline.
    One row per day, one cell per quarter hour, colored by sleep state.
    Expects the columns produced by timeline_frame: date, day, slot, label.
    """
    if df is None or len(df) == 0:
        return _no_data_chart()

    d = df.copy()
    n_days = int(d["day"].nunique())

    color_scale = alt.Scale(domain=LEGEND_LABELS, range=STATE_COLORS)

    chart = (
        alt.Chart(d)
        .mark_rect()
        .encode(
            x=alt.X(
                "slot:O",
                title=None,
                scale=alt.Scale(domain=list(range(SLOTS_PER_DAY))),
                axis=alt.Axis(
                    orient="top",
                    values=list(range(0, SLOTS_PER_DAY, 4)),
                    labelExpr=_TICK_LABEL_EXPR,
                    labelAngle=0,
                    domain=False,
                ),
            ),
            y=alt.Y(
                "yearmonthdate(day):O",
                title=None,
                axis=alt.Axis(labelExpr=_DAY_LABEL_EXPR, domain=False),
            ),
            color=alt.Color(
                "label:N",
                scale=color_scale,
                legend=alt.Legend(title=None, orient="top", symbolType="square"),
            ),
            tooltip=[
                alt.Tooltip("date:T", title="Time", format="%a %d %b %H:%M"),
                alt.Tooltip("label:N", title="State"),
            ],
        )
        .properties(width=width, height=n_days * row_height)
    )
    return chart


# Plotly here since the onset chart wants categorical weekdays against a fixed hour axis
def onset_scatter(rows):
    """Sleep onsets by weekday and hour. Takes build_scatterplot_data output."""
    if not rows:
        fig = go.Figure()
        fig.add_annotation(text="No data", x=0.5, y=0.5, showarrow=False)
        fig.update_layout(height=320)
        return fig

    d = pd.DataFrame(
        {
            "date": [r.date for r in rows],
            "weekday": [r.x for r in rows],
            "hour": [r.y for r in rows],
        }
    )
    d["date_str"] = pd.to_datetime(d["date"]).dt.strftime("%a %d %b %H:%M")

    tickvals = list(range(0, 24, 3))
    ticktext = [format_tick(h * 4) for h in tickvals]

    fig = go.Figure(
        go.Scatter(
            x=d["weekday"],
            y=d["hour"],
            mode="markers",
            marker=dict(size=10, color=STATE_COLORS[SleepState.ASLEEP], opacity=0.7),
            text=d["date_str"],
            hovertemplate="%{text}<extra></extra>",
        )
    )
    fig.update_layout(
        height=320,
        margin=dict(l=20, r=20, t=35, b=10),
        title=dict(text="Falling asleep (weekday vs hour)", x=0.0, xanchor="left"),
    )
    fig.update_xaxes(categoryorder="array", categoryarray=WEEKDAYS)
    fig.update_yaxes(range=[-0.5, 23.5], tickvals=tickvals, ticktext=ticktext, title="Hour")
    return fig
