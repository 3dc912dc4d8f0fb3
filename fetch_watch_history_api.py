#!/usr/bin/env python3
"""
Automated YouTube watch history fetcher.

Uses the YouTube Data API v3 with OAuth to list the user's liked videos
(the API no longer exposes watch history), drops political content, and
saves the rest to recent-videos.json.

Prerequisites:
    1. Google Cloud project with YouTube Data API v3 enabled
    2. OAuth 2.0 client credentials downloaded as credentials.json

Usage:
    python fetch_watch_history_api.py
    python fetch_watch_history_api.py --max-results 100 --output liked.json
"""
import argparse
import json
import sys
from pathlib import Path

import httpx
from google.auth.exceptions import RefreshError, TransportError
from google.auth.transport.requests import Request
from google.oauth2.credentials import Credentials
from google_auth_oauthlib.flow import Flow
from oauthlib.oauth2.rfc6749.errors import OAuth2Error

from schemas import LikedVideo

# =============================================================================
# CONSTANTS
# =============================================================================

SCOPES = ["https://www.googleapis.com/auth/youtube.readonly"]
TOKEN_PATH = Path("youtube-token.json")
CREDENTIALS_PATH = Path("credentials.json")
OUTPUT_FILE = Path("recent-videos.json")

YOUTUBE_API_BASE = "https://www.googleapis.com/youtube/v3"
API_PAGE_SIZE = 50
REQUEST_TIMEOUT = 30.0
DESCRIPTION_LIMIT = 200
RULE_WIDTH = 70

POLITICAL_KEYWORDS = [
    "trump", "biden", "election", "politics", "political",
    "democrat", "republican", "congress", "senate", "president",
    "government", "policy", "legislation", "vote", "voting",
    "campaign", "liberal", "conservative",
]

CREDENTIALS_HELP = """To create credentials:
1. Go to https://console.cloud.google.com
2. Create/select project
3. Enable YouTube Data API v3
4. Create OAuth 2.0 credentials
5. Download as credentials.json
6. Place in this directory"""


# =============================================================================
# EXCEPTIONS
# =============================================================================

class MissingCredentialsError(Exception):
    """Raised when the OAuth client credentials file is missing or unreadable."""
    pass


class YouTubeApiError(Exception):
    """Raised when the YouTube Data API returns an error."""
    pass


# =============================================================================
# FILTERING
# =============================================================================

def is_political(title: str) -> bool:
    """Case-insensitive substring match against POLITICAL_KEYWORDS."""
    lower_title = title.lower()
    return any(keyword in lower_title for keyword in POLITICAL_KEYWORDS)


def filter_political(videos: list[dict]) -> list[dict]:
    return [v for v in videos if not is_political(v.get("title", ""))]


# =============================================================================
# OAUTH
# =============================================================================

def load_client_config(path: Path = CREDENTIALS_PATH) -> dict:
    """Load OAuth client credentials (the JSON downloaded from Cloud Console)."""
    try:
        with open(path, 'r', encoding='utf-8') as f:
            return json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        raise MissingCredentialsError(f"{path} not found or unreadable: {e}") from e


def _save_token(credentials: Credentials, token_path: Path) -> None:
    with open(token_path, 'w', encoding='utf-8') as f:
        f.write(credentials.to_json())


def _load_cached_token(token_path: Path) -> Credentials | None:
    if not token_path.exists():
        return None
    try:
        credentials = Credentials.from_authorized_user_file(str(token_path), SCOPES)
    except ValueError:
        return None

    if credentials.valid:
        return credentials

    if credentials.expired and credentials.refresh_token:
        try:
            credentials.refresh(Request())
        except RefreshError:
            return None
        _save_token(credentials, token_path)
        return credentials

    return None


def get_new_token(client_config: dict, token_path: Path = TOKEN_PATH) -> Credentials:
    """
    Run the authorization-code flow on the console.

    Prints the consent URL, blocks on input() for the code, exchanges it
    and stores the resulting token.
    """
    client_info = client_config.get("installed") or client_config.get("web") or {}
    redirect_uris = client_info.get("redirect_uris") or []
    if not redirect_uris:
        raise MissingCredentialsError("Client credentials have no redirect_uris")

    flow = Flow.from_client_config(client_config, scopes=SCOPES, redirect_uri=redirect_uris[0])
    auth_url, _ = flow.authorization_url(access_type="offline", prompt="consent")

    print("Authorize this app by visiting:\n")
    print(auth_url)
    print()

    try:
        code = input("Enter the code from that page here: ").strip()
    except EOFError as e:
        raise YouTubeApiError("No authorization code entered") from e
    try:
        flow.fetch_token(code=code)
    except OAuth2Error as e:
        raise YouTubeApiError(f"Token exchange failed: {e}") from e
    credentials = flow.credentials

    _save_token(credentials, token_path)
    print(f"Token stored to {token_path}")
    return credentials


def authorize(client_config: dict, token_path: Path = TOKEN_PATH) -> Credentials:
    """Return usable credentials, reusing the cached token when possible."""
    credentials = _load_cached_token(token_path)
    if credentials is not None:
        return credentials
    return get_new_token(client_config, token_path)


# =============================================================================
# YOUTUBE DATA API
# =============================================================================

def _api_get(client: httpx.Client, endpoint: str, params: dict, credentials) -> dict:
    """GET a YouTube Data API endpoint, raising YouTubeApiError on failure."""
    try:
        response = client.get(
            f"{YOUTUBE_API_BASE}/{endpoint}",
            params=params,
            headers={"Authorization": f"Bearer {credentials.token}"},
        )
        response.raise_for_status()
        return response.json()
    except httpx.HTTPStatusError as e:
        try:
            message = e.response.json().get("error", {}).get("message", e.response.text)
        except ValueError:
            message = e.response.text
        raise YouTubeApiError(f"YouTube API error {e.response.status_code}: {message}") from e
    except httpx.HTTPError as e:
        raise YouTubeApiError(f"Request to {endpoint} failed: {e}") from e
    except ValueError as e:
        raise YouTubeApiError(f"Failed to parse {endpoint} response: {e}") from e


def get_my_channel(credentials, client: httpx.Client) -> dict:
    """Return the authenticated user's channel resource."""
    data = _api_get(client, "channels", {"part": "contentDetails", "mine": "true"}, credentials)
    items = data.get("items") or []
    if not items:
        raise YouTubeApiError("No channel found")
    return items[0]


def to_video(item: dict) -> dict:
    snippet = item.get("snippet", {})
    video = LikedVideo(
        title=snippet.get("title", ""),
        url=f"https://www.youtube.com/watch?v={item.get('id')}",
        channel=snippet.get("channelTitle", ""),
        description=(snippet.get("description") or "")[:DESCRIPTION_LIMIT],
    )
    return video.model_dump()


def fetch_liked_videos(credentials, max_results: int = 50,
                       client: httpx.Client | None = None) -> list[dict]:
    """
    List the user's liked videos, newest first.

    Follows nextPageToken until max_results videos are collected or the
    list runs out. Requests are sequential.
    """
    owns_client = client is None
    if owns_client:
        client = httpx.Client(timeout=REQUEST_TIMEOUT)

    videos = []
    page_token = None
    try:
        while len(videos) < max_results:
            params = {
                "part": "snippet",
                "myRating": "like",
                "maxResults": min(API_PAGE_SIZE, max_results - len(videos)),
            }
            if page_token:
                params["pageToken"] = page_token

            data = _api_get(client, "videos", params, credentials)
            videos.extend(to_video(item) for item in data.get("items", []))

            page_token = data.get("nextPageToken")
            if not page_token:
                break
    finally:
        if owns_client:
            client.close()

    return videos[:max_results]


def save_videos(videos: list[dict], path: Path = OUTPUT_FILE) -> None:
    with open(path, 'w', encoding='utf-8') as f:
        json.dump(videos, f, indent=2, ensure_ascii=False)


# =============================================================================
# CLI
# =============================================================================

def print_summary(original_count: int, videos: list[dict], output_path: Path) -> None:
    print("\nResults:")
    print(f"  Total videos:     {original_count}")
    print(f"  After filtering:  {len(videos)}")
    print(f"  Filtered out:     {original_count - len(videos)} political videos\n")
    print(f"Saved to {output_path}\n")

    print("Preview (first 5 videos):\n")
    for i, v in enumerate(videos[:5], 1):
        print(f"{i}. {v['title']}")
        print(f"   {v['channel']}")
        print(f"   {v['url']}\n")


def main(argv: list[str] | None = None):
    parser = argparse.ArgumentParser(
        description="Fetch liked YouTube videos and drop political content",
    )
    parser.add_argument('--credentials', type=Path, default=CREDENTIALS_PATH,
                        help='OAuth client credentials file (default: credentials.json)')
    parser.add_argument('--token', type=Path, default=TOKEN_PATH,
                        help='Where to cache the OAuth token (default: youtube-token.json)')
    parser.add_argument('--output', type=Path, default=OUTPUT_FILE,
                        help='Output JSON file (default: recent-videos.json)')
    parser.add_argument('--max-results', type=int, default=50, metavar='N',
                        help='Number of liked videos to fetch (default: 50)')
    args = parser.parse_args(argv)

    print("Automated YouTube Watch History Fetcher\n")
    print("=" * RULE_WIDTH)
    print()

    try:
        client_config = load_client_config(args.credentials)
    except MissingCredentialsError as e:
        print(f"Error: {e}\n")
        print(CREDENTIALS_HELP)
        sys.exit(1)

    try:
        credentials = authorize(client_config, args.token)

        with httpx.Client(timeout=REQUEST_TIMEOUT) as client:
            get_my_channel(credentials, client)
            print("YouTube API no longer provides direct watch history access.")
            print("Fetching liked videos instead...\n")
            videos = fetch_liked_videos(credentials, args.max_results, client=client)
    except (YouTubeApiError, MissingCredentialsError) as e:
        print(f"Error fetching videos: {e}")
        sys.exit(1)
    except TransportError as e:
        print(f"Error: could not reach Google to refresh the token: {e}")
        sys.exit(1)
    except OSError as e:
        # Token cache couldn't be written
        print(f"Error: {e}")
        sys.exit(1)

    original_count = len(videos)
    videos = filter_political(videos)
    try:
        save_videos(videos, args.output)
    except OSError as e:
        print(f"Error: could not write {args.output}: {e}")
        sys.exit(1)
    print_summary(original_count, videos, args.output)

    print("=" * RULE_WIDTH)
    print("\nNext steps:\n")
    print("1. Review new videos to add")
    print("2. Update ai_video_library.html")
    print("3. Process videos\n")


if __name__ == "__main__":
    main()
