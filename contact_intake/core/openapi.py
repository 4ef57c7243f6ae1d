"""OpenAPI metadata and customization utilities.

Provides a helper to enrich the generated OpenAPI schema with:
- Tags metadata
- The documented contact form body (the endpoint reads raw JSON so it can
  report every invalid field itself, so FastAPI cannot infer it)
- Error response schema shared by the 400/429/500 answers

This keeps documentation concerns decoupled from the app factory.
"""

from __future__ import annotations

from typing import Any, Dict

from fastapi import FastAPI

from contact_intake.schemas.contact import ContactFormPayload

CONTACT_PATH = "/v1/contact"

ERROR_RESPONSE_SCHEMA: Dict[str, Any] = {
    "type": "object",
    "properties": {
        "error": {
            "type": "object",
            "properties": {
                "code": {"type": "string"},
                "message": {"type": "string"},
                "request_id": {"type": "string"},
                "details": {"type": "object"},
            },
            "required": ["code", "message"],
        }
    },
}


def apply_openapi_customizations(app: FastAPI) -> None:
    """Patch FastAPI's OpenAPI generation to add tags and request bodies."""

    original_openapi = app.openapi

    def custom_openapi() -> Dict[str, Any]:
        if app.openapi_schema:
            return app.openapi_schema

        schema = original_openapi()

        components = schema.setdefault("components", {})
        schemas = components.setdefault("schemas", {})
        schemas.setdefault("ContactFormPayload", ContactFormPayload.model_json_schema())
        schemas.setdefault("ErrorResponse", ERROR_RESPONSE_SCHEMA)

        tags = schema.setdefault("tags", [])
        existing_tag_names = {t.get("name") for t in tags}
        desired_tags = [
            {
                "name": "Contact",
                "description": "Public contact form submission.",
            },
            {
                "name": "Health",
                "description": "Liveness checks.",
            },
        ]
        for tag in desired_tags:
            if tag["name"] not in existing_tag_names:
                tags.append(tag)

        post = schema.get("paths", {}).get(CONTACT_PATH, {}).get("post")
        if isinstance(post, dict):
            post["requestBody"] = {
                "required": True,
                "content": {
                    "application/json": {
                        "schema": {"$ref": "#/components/schemas/ContactFormPayload"}
                    }
                },
            }
            for status_code in ("400", "429", "500"):
                response = post.setdefault("responses", {}).setdefault(status_code, {})
                response.setdefault("description", "Error")
                response["content"] = {
                    "application/json": {
                        "schema": {"$ref": "#/components/schemas/ErrorResponse"}
                    }
                }

        app.openapi_schema = schema
        return schema

    app.openapi = custom_openapi  # type: ignore[assignment]
