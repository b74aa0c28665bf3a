import logging

import pandas as pd
import streamlit as st

from sleeplog.charts import fmt_hm_from_minutes, onset_scatter, sleep_heatmap
from sleeplog.config import configure_logging, load_config
from sleeplog.data import SleepLogError, load_sleep_log
from sleeplog.summary import build_averages, build_daily_summary, build_scatterplot_data
from sleeplog.timeline import build_timeline, timeline_frame

logger = logging.getLogger(__name__)


def apply_plotly_light(fig):
    """Transparent Plotly background so the chart sits on the page like the Altair ones."""
    fig.update_layout(
        paper_bgcolor="rgba(0,0,0,0)",
        plot_bgcolor="rgba(0,0,0,0)",
        font=dict(color="#7f1d1d"),
        legend=dict(bgcolor="rgba(0,0,0,0)", borderwidth=0),
    )
    fig.update_xaxes(showgrid=False, zeroline=False, linecolor="rgba(127,29,29,0.25)")
    fig.update_yaxes(
        showgrid=True,
        gridcolor="rgba(127,29,29,0.10)",
        zeroline=False,
        linecolor="rgba(127,29,29,0.25)",
    )
    return fig


@st.cache_data(show_spinner=False)
def load_timeline(path: str):
    rows = load_sleep_log(path)
    return build_timeline(rows)


cfg = load_config()
configure_logging(cfg["log_level"])

st.set_page_config(page_title=cfg["page_title"], layout="wide")

# Header
st.title(cfg["page_title"])
st.caption("But tracking it doesn't have to be")

# Data loading
path = cfg["data_path"]
try:
    points = load_timeline(path)
except (SleepLogError, FileNotFoundError) as exc:
    logger.error("Could not load sleep log %s: %s", path, exc)
    st.error(f"Could not load sleep log `{path}`: {exc}")
    st.stop()

frame = timeline_frame(points)

heatmap_cfg = cfg["heatmap"]
st.altair_chart(
    sleep_heatmap(frame, row_height=heatmap_cfg["row_height"]),
    use_container_width=True,
    theme=None,
)

left, right = st.columns([3, 2], gap="large")

summary = build_daily_summary(points)

with left:
    with st.container(border=True):
        st.markdown("#### Daily summary")
        table = pd.DataFrame(
            {
                "Date": summary["date"].dt.strftime("%a %d %b"),
                "Longest Sleep*": summary["longest_sleep"].apply(fmt_hm_from_minutes),
                "Time Asleep": summary["time_asleep"].apply(fmt_hm_from_minutes),
                "Total Time in Bed": summary["time_in_bed"].apply(fmt_hm_from_minutes),
                "Idle Time in Bed": summary["idle_in_bed"].apply(fmt_hm_from_minutes),
            }
        )
        st.dataframe(table, hide_index=True, use_container_width=True)
        st.caption("*Longest sleep counts sleep cycles that wrap days on the day the cycle ends")

with right:
    averages = build_averages(summary)
    with st.container(border=True):
        st.markdown("#### Averages")
        c1, c2 = st.columns(2)
        c1.metric("Average Slept", f"{averages['average_slept_per_day'] / 60:.2f} hrs")
        c2.metric("Average Time In Bed", f"{averages['average_in_bed_per_day'] / 60:.2f} hrs")

    with st.container(border=True):
        st.markdown("#### Falling asleep")
        st.caption("When each sleep started, by weekday")
        fig = apply_plotly_light(onset_scatter(build_scatterplot_data(points)))
        st.plotly_chart(fig, use_container_width=True, config={"displayModeBar": False})
