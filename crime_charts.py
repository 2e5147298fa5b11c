import base64
import colorsys
from io import BytesIO
from typing import Optional, Sequence

import matplotlib
matplotlib.use('Agg')
import matplotlib.pyplot as plt
from matplotlib.ticker import FuncFormatter

from crime_aggregation import DisplayCountEntry, TimeBucketEntry

# --- Configuration ---
# Colors for pie chart - dark mode friendly
COLORS = ['#60a5fa', '#34d399', '#fbbf24', '#fb7185', '#a78bfa', '#2dd4bf', '#f59e0b', '#ef4444', '#8b5cf6', '#06b6d4']
BACKGROUND = '#1e293b'
TEXT_COLOR = '#e2e8f0'
AXIS_COLOR = '#94a3b8'
GRID_COLOR = (1.0, 1.0, 1.0, 0.1)
LINE_COLOR = '#34d399'
PIE_LABEL_LENGTH = 15


def hsl_color(hue: float, saturation: float, lightness: float):
    """RGB tuple for a CSS style hsl() color (hue in degrees, the rest in percent)."""
    return colorsys.hls_to_rgb((hue % 360) / 360, min(lightness, 100) / 100, saturation / 100)

def figure_to_base64(fig) -> str:
    """Render a figure to PNG and return it base64 encoded. The figure is closed."""
    buffer = BytesIO()
    fig.savefig(buffer, format='png', facecolor=fig.get_facecolor())
    buffer.seek(0)
    image_png = buffer.getvalue()
    buffer.close()
    plt.close(fig)
    return base64.b64encode(image_png).decode('utf-8')

def _style_axes(fig, ax):
    fig.patch.set_facecolor(BACKGROUND)
    ax.set_facecolor(BACKGROUND)
    ax.tick_params(colors=TEXT_COLOR, labelsize=9)
    for spine in ax.spines.values():
        spine.set_color(AXIS_COLOR)
    ax.grid(color=GRID_COLOR, linestyle='--')
    ax.set_axisbelow(True)
    ax.title.set_color(TEXT_COLOR)
    ax.xaxis.label.set_color(TEXT_COLOR)
    ax.yaxis.label.set_color(TEXT_COLOR)

def _thousands(value, _position=None):
    return f"{int(value):,}"

def _horizontal_bar_chart(entries: Sequence[DisplayCountEntry], title: str, colors) -> str:
    fig, ax = plt.subplots(figsize=(10, 6))
    _style_axes(fig, ax)
    # Largest count at the top
    labels = [entry.display_label for entry in reversed(entries)]
    values = [entry.value for entry in reversed(entries)]
    # Positions rather than categories, truncated labels may repeat
    positions = range(len(values))
    ax.barh(positions, values, color=list(reversed(colors)))
    ax.set_yticks(positions)
    ax.set_yticklabels(labels)
    ax.set_title(title)
    ax.set_xlabel('Number of Crimes')
    ax.xaxis.set_major_formatter(FuncFormatter(_thousands))
    fig.tight_layout()
    return figure_to_base64(fig)

def crime_types_chart(entries: Sequence[DisplayCountEntry]) -> Optional[str]:
    if not entries:
        return None
    colors = [hsl_color(210 + index * 8, 70, 60 + index * 1.5) for index in range(len(entries))]
    return _horizontal_bar_chart(entries, 'Top 15 Crime Types', colors)

def areas_chart(entries: Sequence[DisplayCountEntry]) -> Optional[str]:
    if not entries:
        return None
    colors = [hsl_color(40 + index * 4, 80, 55 + index * 1.5) for index in range(len(entries))]
    return _horizontal_bar_chart(entries, 'Top 15 Areas by Crime Count', colors)

def crimes_over_time_chart(entries: Sequence[TimeBucketEntry]) -> Optional[str]:
    if not entries:
        return None
    fig, ax = plt.subplots(figsize=(10, 5))
    _style_axes(fig, ax)
    keys = [entry.period_key for entry in entries]
    values = [entry.value for entry in entries]
    ax.plot(keys, values, color=LINE_COLOR, linewidth=3, marker='o', markersize=3, label='Number of Crimes')
    ax.set_title('Crimes Over Time (Monthly Trends)')
    ax.set_xlabel('Month')
    ax.set_ylabel('Number of Crimes')
    ax.yaxis.set_major_formatter(FuncFormatter(_thousands))
    plt.setp(ax.get_xticklabels(), rotation=45, ha='right')
    fig.tight_layout()
    return figure_to_base64(fig)

def pie_label(name: str, percent: float) -> str:
    """Wedge label such as 'Central: 12.5%', long names cut to 12 characters."""
    if len(name) > PIE_LABEL_LENGTH:
        name = name[:PIE_LABEL_LENGTH - 3] + '...'
    return f"{name}: {percent * 100:.1f}%"

def area_distribution_chart(entries: Sequence[DisplayCountEntry]) -> Optional[str]:
    if not entries:
        return None
    total = sum(entry.value for entry in entries)
    fig, ax = plt.subplots(figsize=(10, 7))
    fig.patch.set_facecolor(BACKGROUND)
    ax.set_title('Crime Distribution by Area', color=TEXT_COLOR)
    wedges, _texts = ax.pie(
        [entry.value for entry in entries],
        labels=[pie_label(entry.display_label, entry.value / total) for entry in entries],
        colors=[COLORS[index % len(COLORS)] for index in range(len(entries))],
        textprops={'color': TEXT_COLOR, 'fontsize': 9},
        wedgeprops={'linewidth': 1, 'edgecolor': '#cbd5e1'},
    )
    ax.axis('equal')
    legend = ax.legend(
        wedges,
        [f"{entry.display_label}: {entry.value:,}" for entry in entries],
        loc='center left',
        bbox_to_anchor=(1.0, 0.5),
        frameon=False,
        fontsize=9,
    )
    for text in legend.get_texts():
        text.set_color(TEXT_COLOR)
    fig.tight_layout()
    return figure_to_base64(fig)
