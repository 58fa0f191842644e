from typing import Annotated, cast

from fastapi import Depends, Request

from cinefind.app import App
from cinefind.core.modules.session.models import SessionUser


async def get_app(request: Request) -> App:
    return cast(App, request.app.state.app)


async def get_current_user(app: Annotated[App, Depends(get_app)]) -> SessionUser:
    """Resolve the signed-in user, raising AuthenticationError when logged out."""
    return app.get_current_user()


# Type aliases for dependencies
AppDep = Annotated[App, Depends(get_app)]
CurrentUserDep = Annotated[SessionUser, Depends(get_current_user)]
