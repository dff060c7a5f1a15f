"""
LinkedIn people-search integration.
Fetches one page of voyager search results and parses them into lead profiles.

Note: the voyager endpoint is undocumented and needs a logged-in session cookie.
"""
from typing import Any, Dict, List, Optional
from urllib.parse import quote

import httpx
from pydantic import BaseModel

from outflo.core.exceptions import ExternalServiceError, RateLimitError


PAGE_SIZE = 10


# =============================================================================
# PARSED RESULTS
# =============================================================================

class ParsedProfile(BaseModel):
    """A lead candidate; fields that could not be resolved are listed in `missing`."""
    external_id: str
    name: str = ""
    handle: str = ""
    job_title: str = ""
    company: str = ""
    location: str = ""
    profile_url: str = ""
    summary: str = ""
    image_url: str = ""
    missing: List[str] = []

    def to_record(self) -> Dict[str, Any]:
        return self.model_dump(exclude={"missing"})


class SkippedItem(BaseModel):
    """A search result that did not produce a profile."""
    index: int
    reason: str
    tracking_urn: Optional[str] = None


class SearchParseResult(BaseModel):
    profiles: List[ParsedProfile] = []
    skipped: List[SkippedItem] = []


# =============================================================================
# PARSER
# =============================================================================

def _text(item: dict, key: str) -> str:
    value = item.get(key)
    if isinstance(value, dict):
        return value.get("text") or ""
    return ""


def profile_url_from_navigation(navigation_url: Optional[str]) -> str:
    """Drop the query string from a search result's navigation URL."""
    if not navigation_url:
        return ""
    return navigation_url.split("?")[0]


def handle_from_profile_url(profile_url: str) -> str:
    if "/in/" not in profile_url:
        return ""
    return profile_url.split("/in/")[1].split("/")[0]


def company_from_text(text: str) -> str:
    """'Head of Growth at Acme' -> 'Acme'"""
    if " at " not in text:
        return ""
    return text.split(" at ")[1].strip()


def _image_url(item: dict) -> str:
    try:
        attribute = item["image"]["attributes"][0]
        picture = attribute["detailData"]["nonEntityProfilePicture"]
        return picture["vectorImage"]["artifacts"][0]["fileIdentifyingUrlPathSegment"] or ""
    except (KeyError, IndexError, TypeError):
        return ""


def parse_search_results(payload: dict) -> SearchParseResult:
    """
    Turn a voyager search response into lead candidates.

    Only entries with template UNIVERSAL are people results. The member id is
    the 4th segment of trackingUrn (urn:li:member:<id>); "headless" ids are
    out-of-network placeholders and are skipped.
    """
    result = SearchParseResult()
    included = payload.get("included") if isinstance(payload, dict) else None

    for index, item in enumerate(included or []):
        if not isinstance(item, dict) or item.get("template") != "UNIVERSAL":
            continue

        tracking_urn = item.get("trackingUrn")
        parts = tracking_urn.split(":") if isinstance(tracking_urn, str) else []
        external_id = parts[3] if len(parts) > 3 else ""

        if not external_id:
            result.skipped.append(SkippedItem(index=index, reason="missing tracking id", tracking_urn=tracking_urn))
            continue
        if external_id == "headless":
            result.skipped.append(SkippedItem(index=index, reason="headless profile", tracking_urn=tracking_urn))
            continue

        summary = _text(item, "summary")
        job_title = _text(item, "primarySubtitle")
        profile_url = profile_url_from_navigation(item.get("navigationUrl"))

        fields = {
            "name": _text(item, "title"),
            "handle": handle_from_profile_url(profile_url),
            "job_title": job_title,
            "company": company_from_text(summary) or company_from_text(job_title),
            "location": _text(item, "secondarySubtitle"),
            "profile_url": profile_url,
            "summary": summary,
            "image_url": _image_url(item),
        }
        missing = [field for field, value in fields.items() if not value]
        result.profiles.append(ParsedProfile(external_id=external_id, missing=missing, **fields))

    return result


# =============================================================================
# SEARCH CLIENT
# =============================================================================

class LinkedInSearchClient:
    """
    Client for the voyager GraphQL people search.
    One request per call, no retries.
    """

    BASE_URL = "https://www.linkedin.com/voyager/api/graphql"
    QUERY_ID = "voyagerSearchDashClusters.181547298141ca2c72182b748713641b"

    def __init__(self, cookies: str, csrf_token: str = "", client: Optional[httpx.AsyncClient] = None):
        self.cookies = cookies
        self.csrf_token = csrf_token
        self.client = client or httpx.AsyncClient()

    @property
    def headers(self) -> Dict[str, str]:
        headers = {
            "accept": "application/vnd.linkedin.normalized+json+2.1",
            "x-restli-protocol-version": "2.0.0",
            "cookie": self.cookies,
        }
        if self.csrf_token:
            headers["csrf-token"] = self.csrf_token
        return headers

    def search_url(self, search_term: str, page: int = 1) -> str:
        start = (page - 1) * PAGE_SIZE
        keywords = quote(search_term, safe="")
        variables = (
            f"(start:{start},origin:SWITCH_SEARCH_VERTICAL,"
            f"query:(keywords:{keywords},flagshipSearchIntent:SEARCH_SRP,"
            f"queryParameters:List((key:resultType,value:List(PEOPLE))),"
            f"includeFiltersInResponse:false))"
        )
        return f"{self.BASE_URL}?variables={variables}&queryId={self.QUERY_ID}"

    async def search_people(self, search_term: str, page: int = 1) -> dict:
        """Fetch one page of people results as raw JSON."""
        response = await self.client.get(self.search_url(search_term, page), headers=self.headers)

        if response.status_code == 429:
            raise RateLimitError("LinkedIn")

        try:
            payload = response.json()
        except ValueError as e:
            raise ExternalServiceError("LinkedIn", f"LinkedIn returned invalid JSON ({response.status_code})") from e

        if isinstance(payload, dict) and payload.get("status") == 429:
            raise RateLimitError("LinkedIn")
        if response.status_code != 200:
            raise ExternalServiceError("LinkedIn", f"LinkedIn search failed with status {response.status_code}")

        return payload

    async def close(self):
        await self.client.aclose()
