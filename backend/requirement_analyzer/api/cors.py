from fastapi import Response
from fastapi.middleware.cors import CORSMiddleware

from requirement_analyzer.api.routes import CORS_ALLOW_HEADERS

# Rewritten for the empty preflight body
_REPLACED_HEADERS = {"access-control-allow-headers", "content-length", "content-type"}


class PreflightCORSMiddleware(CORSMiddleware):
    """
    Answers an accepted browser preflight with an empty body and exactly the
    allowed request headers. Rejected preflights keep Starlette's 400.
    """

    def preflight_response(self, request_headers) -> Response:
        response = super().preflight_response(request_headers)
        if response.status_code != 200:
            return response

        headers = {
            key: value
            for key, value in response.headers.items()
            if key not in _REPLACED_HEADERS
        }
        headers["Access-Control-Allow-Headers"] = ", ".join(CORS_ALLOW_HEADERS)
        return Response(status_code=200, headers=headers)
