"""
Response rendering
Maps a GatewayResult onto a Starlette response
"""

from fastapi.responses import JSONResponse, Response

from gateway_service.models.proxy import ContentKind, GatewayResult


def render_result(result: GatewayResult) -> Response:
    """Render a handler result as the HTTP response sent to the browser"""
    if result.error is not None:
        return JSONResponse(content=result.error.to_body(), status_code=result.error.status)

    response = result.response
    if response.kind == ContentKind.JSON:
        return JSONResponse(content=response.body, status_code=response.status)

    return Response(
        content=response.body,
        status_code=response.status,
        headers=response.headers,
    )
