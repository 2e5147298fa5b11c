import requests
import json
from typing import Dict, List, Optional

# --- Configuration ---
BASE_URL = "https://data.lacity.org/resource/2nrs-mtv8.json"
DATASET_URL = "https://data.lacity.org/d/2nrs-mtv8"
SAMPLE_LIMIT = 50000  # Sample size for analysis
START_DATE = "2020-01-01"
DATE_FIELD = 'date_rptd'
REQUEST_TIMEOUT = 60

# --- API Data Fetching ---

def build_query_params(limit: int = SAMPLE_LIMIT, since: str = START_DATE) -> Dict[str, str]:
    """Socrata query for the newest `limit` crimes reported on or after `since`."""
    return {
        '$limit': str(limit),
        '$where': f"{DATE_FIELD} >= '{since}'",
        '$order': f"{DATE_FIELD} DESC",
    }

def get_api_data(url, params):
    """A helper function to get data from the open data API."""
    try:
        response = requests.get(url, params=params, timeout=REQUEST_TIMEOUT)
        response.raise_for_status()  # Raise an exception for bad status codes
        return response.json()
    except requests.exceptions.RequestException as e:
        print(f"Error fetching data from {url}: {e}")
        return None
    except json.JSONDecodeError:
        print(f"Error decoding JSON from {url}. Response was: {response.text}")
        return None

def fetch_crime_records(limit: int = SAMPLE_LIMIT, since: str = START_DATE) -> Optional[List[dict]]:
    """
    Fetch a sample of crime records from the City of Los Angeles open data API.

    Args:
        limit (int): Maximum number of records to request
        since (str): Only records reported on or after this date (YYYY-MM-DD)

    Returns:
        list: One dict per crime record, newest first
        None: If the request failed or the response was not a list of records
    """
    print(f"Fetching aggregated crime data from {since[:4]}...")
    print("Loading data sample...")
    data = get_api_data(BASE_URL, build_query_params(limit, since))
    if data is None:
        return None
    if not isinstance(data, list):
        print(f"Unexpected response from {BASE_URL}: expected a list of records")
        return None

    print("Processing data...")
    print(f"Loaded {len(data):,} records for analysis")
    return data
