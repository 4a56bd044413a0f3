"""
Translating screen results into HTTP responses.

- A successful ScreenResponse becomes a ScreenResponseSchema body
- A pending confirmation becomes 409 so the client can ask and resend with
  ?confirmed=true
- Any other failure becomes 400
- AuthenticationError, raised from any route, becomes a 401 that points the
  client at the login screen
"""

from fastapi import FastAPI, HTTPException, Request
from fastapi.responses import JSONResponse

from backend.schemas import ScreenResponseSchema
from familyhub.core.errors import AuthenticationError
from familyhub.screens import ScreenResponse


def to_schema(response: ScreenResponse, failure_status: int = 400) -> ScreenResponseSchema:
    """Return the response body, or raise HTTPException for failures."""
    if response.confirmation_required:
        raise HTTPException(status_code=409, detail=response.message)
    if not response.success:
        raise HTTPException(status_code=failure_status, detail=response.message)

    return ScreenResponseSchema(
        success=response.success,
        message=response.message,
        data=response.data,
        confirmation_required=response.confirmation_required,
        suggestions=response.suggestions,
    )


async def authentication_error_handler(request: Request, exc: AuthenticationError) -> JSONResponse:
    return JSONResponse(
        status_code=401,
        content={"detail": exc.message, "redirect": exc.redirect_to},
        headers={"Location": exc.redirect_to},
    )


def install_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(AuthenticationError, authentication_error_handler)
