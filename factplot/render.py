"""
gnuplot script rendering for canonical fact series.

The series is embedded as an inline datablock, one "<val> <start> <end>" line
per observation, and drawn at the period end with a horizontal error bar
spanning the reporting period.
"""
from typing import List, Optional

from .utils import CanonicalRecord, format_series


def quote(text: str) -> str:
    """Quote a string for a gnuplot double-quoted literal."""
    return '"' + text.replace("\\", "\\\\").replace('"', '\\"') + '"'


def plot_title(entity_name: str, concept: str, label: Optional[str], unit: Optional[str]) -> str:
    title = f"{entity_name}: {label or concept}"
    if unit:
        title += f" ({unit})"
    return title


def gnuplot_script(
    records: List[CanonicalRecord],
    title: str,
    ylabel: str = "",
    terminal: Optional[str] = None,
    output: Optional[str] = None,
) -> str:
    """
    Build a gnuplot script plotting the series with period error bars.

    Args:
        records: Canonical records in plotting order
        title: Plot title
        ylabel: Y axis label (usually the unit)
        terminal: gnuplot terminal, e.g. "pngcairo size 1200,600"
        output: Output file for the terminal

    Returns:
        Script text, newline terminated
    """
    lines = []
    if terminal:
        lines.append(f"set terminal {terminal}")
    if output:
        lines.append(f"set output {quote(output)}")

    lines += [
        f"set title {quote(title)} noenhanced",
        f"set ylabel {quote(ylabel)} noenhanced",
        "set key off",
        "set grid",
    ]

    if not records:
        # An empty datablock makes gnuplot abort, so draw an empty frame instead
        lines += [
            'set label 1 "No data" at graph 0.5, graph 0.5 center',
            "set xrange [0:1]",
            "set yrange [0:1]",
            "unset xtics",
            "unset ytics",
            "plot NaN notitle",
        ]
        return "\n".join(lines) + "\n"

    lines += [
        "set xdata time",
        'set timefmt "%Y-%m-%d"',
        'set format x "%Y"',
        "set format y \"%.3s%c\"",
        "$data << EOD",
        format_series(records),
        "EOD",
        "plot $data using 3:1:2:3 with xerrorbars pointtype 7 pointsize 0.8",
    ]
    return "\n".join(lines) + "\n"
