"""Sample widdershins output, specs and tree builders shared by the tests."""

from typing import Any

from openapi_review.models import ContentNode

PETSTORE_DOCS = """<h1 id="pet-store">Pet Store v1.0.0</h1>

> Scroll down for example requests and responses.

Base URLs:

* <a href="http://petstore.example.com/v1">http://petstore.example.com/v1</a>

# Authentication

<h1 id="pet-store-pets">pets</h1>

## Create Pet

<a id="opIdcreatePet"></a>

`POST /pets`

<h3 id="createpet-parameters">Parameters</h3>

|Name|In|Type|Required|
|---|---|---|---|
|body|body|Pet|true|

## List Pets

<a id="opIdlistPets"></a>

`GET /pets`

> Example responses

```json
[]
```

<h1 id="pet-store-schemas">Schemas</h1>

<h2 id="tocS_Pet">Pet</h2>

<a id="schemapet"></a>

|Name|Type|
|---|---|
|id|integer|
"""

PETSTORE_YAML = """openapi: 3.0.0
info:
  title: Pet Store
  version: 1.0.0
paths:
  /pets:
    get:
      operationId: listPets
      responses:
        "200":
          description: ok
    post:
      operationId: createPet
      responses:
        "201":
          description: created
"""


def petstore_spec(version: str) -> dict[str, Any]:
    return {
        "openapi": "3.0.0",
        "info": {"title": "Pet Store", "version": version},
        "paths": {
            "/pets": {
                "get": {"operationId": "listPets", "responses": {"200": {"description": "ok"}}},
                "post": {"operationId": "createPet", "responses": {"201": {"description": "created"}}},
            },
        },
    }


def diff_at(location: str, side: str = "destinationSpecEntityDetails") -> dict[str, Any]:
    other = "sourceSpecEntityDetails" if side == "destinationSpecEntityDetails" else "destinationSpecEntityDetails"
    return {
        "type": "breaking",
        "action": "add",
        "code": "request.body.scope",
        side: [{"location": location, "value": None}],
        other: [],
    }


def heading(depth: int, label: str) -> ContentNode:
    return ContentNode(type="heading", depth=depth, children=[ContentNode(type="text", value=label)])


def paragraph(label: str) -> ContentNode:
    return ContentNode(type="paragraph", children=[ContentNode(type="text", value=label)])


def anchor(operation_id: str) -> ContentNode:
    return ContentNode(
        type="paragraph",
        children=[
            ContentNode(type="html", value=f'<a id="opId{operation_id}">'),
            ContentNode(type="html", value="</a>"),
        ],
    )


def root(*children: ContentNode) -> ContentNode:
    return ContentNode(type="root", children=list(children))


def texts(node: ContentNode) -> list[str]:
    """All text values under *node*, in document order."""
    found = [node.value] if node.type == "text" and node.value is not None else []
    for child in node.children or []:
        found += texts(child)
    return found


def html_values(node: ContentNode) -> list[str]:
    return [child.value or "" for child in node.children or [] if child.type == "html"]
