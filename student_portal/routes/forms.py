from fastapi import Request


async def read_payload(request: Request) -> dict:
    """Return the request body as a dict, whether it was sent as JSON or as a form."""
    content_type = request.headers.get("content-type", "")
    if content_type.startswith("application/json"):
        try:
            body = await request.json()
        except ValueError:
            return {}
        return body if isinstance(body, dict) else {}

    form_data = await request.form()
    return dict(form_data)
