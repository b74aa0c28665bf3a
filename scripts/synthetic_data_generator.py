import numpy as np
import pandas as pd

HEADER = "date,toBed,asleep,awake,outOfBed"


def _clamp(x, lo, hi):
    return max(lo, min(hi, x))


def _fmt_hm(ts: pd.Timestamp) -> str:
    return ts.strftime("%H:%M")


def generate_sleep_log(
    start_date="2021-01-01",
    end_date="2021-03-31",
    seed=42,
    no_sleep_prob=0.03,        # went to bed but never fell asleep
    unknown_exit_prob=0.15,    # out of bed logged as "?"
):
    """Random hand-logged sleep cycles, one per night, in the CSV log format."""
    rng = np.random.default_rng(seed)
    dates = pd.date_range(start_date, end_date, freq="D")

    lines = [HEADER]
    for d in dates:
        is_weekend = d.strftime("%A") in ["Friday", "Saturday"]

        # Bedtime in hours after midnight of the logged date; later on weekends
        bed_hour = rng.normal(23.6 if is_weekend else 23.0, 0.5)
        bed_hour = _clamp(bed_hour, 21.5, 23.95)
        to_bed = d + pd.Timedelta(minutes=int(bed_hour * 60))

        latency = int(_clamp(rng.normal(20, 10), 5, 60))
        duration = int(_clamp(rng.normal(450, 45), 300, 600))
        linger = int(_clamp(rng.normal(10, 8), 0, 45))

        asleep = to_bed + pd.Timedelta(minutes=latency)
        awake = asleep + pd.Timedelta(minutes=duration)
        out_of_bed = awake + pd.Timedelta(minutes=linger)

        asleep_str = "" if rng.random() < no_sleep_prob else _fmt_hm(asleep)
        out_str = "?" if rng.random() < unknown_exit_prob else _fmt_hm(out_of_bed)

        lines.append(f"{d.strftime('%Y-%m-%d')},{_fmt_hm(to_bed)},{asleep_str},{_fmt_hm(awake)},{out_str}")

    return "\n".join(lines) + "\n"


if __name__ == "__main__":
    text = generate_sleep_log("2021-01-01", "2021-03-31", seed=7)
    print("\n".join(text.splitlines()[:12]))

    with open("data/synthetic.csv", "w", encoding="utf-8") as f:
        f.write(text)
    print("\nSaved -> data/synthetic.csv")
