import html
import os
import webbrowser
from dataclasses import dataclass
from typing import List, Optional

from crime_aggregation import AggregationResult, aggregate
from crime_charts import areas_chart, area_distribution_chart, crime_types_chart, crimes_over_time_chart
from crime_table import TABLE_LIMIT, table_html
from la_crime_data import DATASET_URL, fetch_crime_records

# --- Configuration ---
OUTPUT_DASHBOARD_FILE = 'la_crime_dashboard.html'
OUTPUT_TABLE_FILE = 'la_crime_dashboard_table.html'
GRAPHS = 'graphs'
TABLE = 'table'
ERROR_MESSAGE = "Could not load crime data."


@dataclass
class DashboardState:
    """Everything the page depends on. `records` is None until data has loaded."""
    records: Optional[List[dict]] = None
    view_mode: str = GRAPHS
    error: Optional[str] = None


STYLE = '''
        body {
            font-family: 'Roboto', sans-serif;
            margin: 0 auto;
            max-width: 1200px;
            padding: 20px;
            background-color: #0f172a;
            color: #e2e8f0;
        }
        h1 {
            color: #f1f5f9;
            font-weight: 700;
        }
        h2 {
            border-bottom: 2px solid #60a5fa;
            padding-bottom: 10px;
            color: #60a5fa;
            font-weight: 400;
        }
        a {
            color: #60a5fa;
        }
        .view-toggle a {
            display: inline-block;
            padding: 8px 16px;
            margin-right: 8px;
            border: 1px solid #475569;
            border-radius: 8px;
            text-decoration: none;
            color: #e2e8f0;
        }
        .view-toggle a.active {
            background-color: #60a5fa;
            color: #0f172a;
        }
        .chart-section {
            background-color: #1e293b;
            border-radius: 8px;
            padding: 20px;
            margin-top: 20px;
        }
        .error {
            border: 1px solid #ef4444;
            border-radius: 8px;
            padding: 10px 20px;
            color: #fb7185;
        }
        .table-wrapper {
            overflow-x: auto;
        }
        table {
            width: 100%;
            border-collapse: collapse;
            margin-top: 10px;
            font-size: 13px;
        }
        th, td {
            padding: 8px;
            border: 1px solid #475569;
            text-align: left;
        }
        th {
            background-color: #1e293b;
            font-weight: 700;
            text-transform: capitalize;
        }
        img {
            max-width: 100%;
            border-radius: 5px;
        }
'''


def page_file(view_mode: str) -> str:
    return OUTPUT_TABLE_FILE if view_mode == TABLE else OUTPUT_DASHBOARD_FILE

def _view_toggle(view_mode: str) -> str:
    links = []
    for mode, text in ((GRAPHS, 'Graphs'), (TABLE, 'Table')):
        active = ' class="active"' if mode == view_mode else ''
        links.append(f'<a href="{page_file(mode)}"{active}>{text}</a>')
    return f'<div class="controls"><div class="view-toggle">{"".join(links)}</div></div>'

def _chart_section(title: str, image_b64: Optional[str]) -> str:
    if image_b64 is None:
        body = '<p>No data available</p>'
    else:
        body = f'<img src="data:image/png;base64,{image_b64}" alt="{html.escape(title)}">'
    return f'''
            <div class="chart-section">
                <h2>{html.escape(title)}</h2>
                {body}
            </div>'''

def render_charts(result: AggregationResult) -> str:
    sections = [
        _chart_section('Top 15 Crime Types', crime_types_chart(result.by_category)),
        _chart_section('Crimes Over Time (Monthly Trends)', crimes_over_time_chart(result.over_time)),
        _chart_section('Top 15 Areas by Crime Count', areas_chart(result.by_area)),
        _chart_section('Crime Distribution by Area', area_distribution_chart(result.by_area)),
    ]
    return f'<div class="charts-container">{"".join(sections)}</div>'

def record_count_banner(total: int, view_mode: str) -> str:
    note = f'<span class="table-note"> (Showing first {TABLE_LIMIT:,} in table)</span>' if view_mode == TABLE else ''
    return (f'<p class="record-count">Sample Analysis: <strong>{total:,}</strong> '
            f'records analyzed from 2020 to present{note}</p>')

def _render_body(state: DashboardState) -> str:
    if state.error:
        return f'''
        <div class="error">
            <p>Error: {html.escape(state.error)}</p>
            <p>Note: The City of Los Angeles open data portal may be unavailable. Try again later.</p>
        </div>'''
    if not state.records:
        return '<div class="data-container"><p>No data available</p></div>'

    banner = record_count_banner(len(state.records), state.view_mode)
    if state.view_mode == TABLE:
        content = f'<div class="table-wrapper">{table_html(state.records)}</div>'
    else:
        content = render_charts(aggregate(state.records))
    return f'<div class="data-container">{banner}{content}</div>'

def render_dashboard(state: DashboardState) -> str:
    """
    Render the dashboard page for the given state.

    Args:
        state (DashboardState): Loaded records (or error) and the selected view

    Returns:
        str: A complete, self-contained HTML document
    """
    if state.view_mode not in (GRAPHS, TABLE):
        raise ValueError(f"Unknown view mode: {state.view_mode!r}")

    return f'''
    <html>
    <head>
        <meta charset="utf-8">
        <title>Los Angeles Crime Data</title>
        <link href="https://fonts.googleapis.com/css2?family=Roboto:wght@300;400;700&display=swap" rel="stylesheet">
        <style>{STYLE}</style>
    </head>
    <body>
        <div class="App">
            <h1>Los Angeles Crime Data (2020 - Present)</h1>
            <p class="source-info">
                Data from: <a href="{DATASET_URL}" target="_blank" rel="noopener noreferrer">City of Los Angeles Open Data</a>
            </p>
            {_view_toggle(state.view_mode)}
            {_render_body(state)}
        </div>
    </body>
    </html>
    '''

def create_dashboard(output_dir: str = '.'):
    """
    Fetches a sample of LA crime records, writes the graphs and table pages of the
    dashboard and opens the graphs page in a web browser.
    """
    print("Starting dashboard generation for Los Angeles...")

    records = fetch_crime_records()
    if records is None:
        print("No data was returned from the API. Writing error page.")
        states = [DashboardState(view_mode=mode, error=ERROR_MESSAGE) for mode in (GRAPHS, TABLE)]
    else:
        states = [DashboardState(records=records, view_mode=mode) for mode in (GRAPHS, TABLE)]

    for state in states:
        output_file = os.path.join(output_dir, page_file(state.view_mode))
        with open(output_file, 'w', encoding='utf-8') as f:
            f.write(render_dashboard(state))
        print(f"Saved {state.view_mode} view to '{output_file}'")

    output_file = os.path.join(output_dir, OUTPUT_DASHBOARD_FILE)
    if records is not None:
        print(f"\nSuccess! Dashboard has been saved to '{output_file}'")
    webbrowser.open(f"file://{os.path.realpath(output_file)}")

if __name__ == '__main__':
    create_dashboard()
