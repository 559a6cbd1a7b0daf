"""Azure DevOps work item REST request formatting."""

import json
from urllib.parse import quote

API_BASE_URL = "https://dev.azure.com"
API_VERSION = "5.0"
WORK_ITEM_TYPE = "Bug"

CONTENT_TYPE = "application/json-patch+json"

TITLE_FIELD = "/fields/System.Title"
# Bugs show Repro Steps on their form; System.Description stays hidden there.
DESCRIPTION_FIELD = "/fields/Microsoft.VSTS.TCM.ReproSteps"


def create_work_item_uri(organization: str, project: str) -> str:
    """Build the create URI, e.g. https://dev.azure.com/org/proj/_apis/wit/workitems/$Bug?api-version=5.0"""
    return (
        f"{API_BASE_URL}/{quote(organization, safe='')}/{quote(project, safe='')}"
        f"/_apis/wit/workitems/${WORK_ITEM_TYPE}?api-version={API_VERSION}"
    )


def field_operation(path: str, value: str) -> dict:
    return {"op": "add", "path": path, "from": None, "value": value}


def create_work_item_body(title: str, content: str) -> str:
    """Serialize the JSON Patch document setting title and description."""
    operations = [
        field_operation(TITLE_FIELD, title),
        field_operation(DESCRIPTION_FIELD, content),
    ]
    return json.dumps(operations, separators=(",", ":"), ensure_ascii=False)


def parse_created_work_item(body: str) -> dict[str, str]:
    """
    Pick the id and web link out of a create response.

    Returns an empty dict when the body is not a work item document.
    """
    try:
        data = json.loads(body)
    except (TypeError, ValueError):
        return {}

    if not isinstance(data, dict) or "id" not in data:
        return {}

    result = {"id": str(data["id"])}
    links = data.get("_links")
    html = links.get("html") if isinstance(links, dict) else None
    href = html.get("href") if isinstance(html, dict) else None
    if href:
        result["url"] = str(href)
    return result
