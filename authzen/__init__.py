"""
AuthZEN access checks for Flask applications.

Routes are protected with :func:`authzen.decorators.authorize`. On each
request to a protected route, the subject is identified (explicitly, from a
request header, from a verified bearer token, or from the upstream
authenticated principal), and an AuthZEN decision service is asked whether
that subject may perform the route's action on its resource. The route runs
only if the answer is ``allow``. If no subject can be identified the request
is rejected with 401 (Unauthorized); any other answer, including failure to
reach the decision service, is rejected with 403 (Forbidden).
"""

import logging
from typing import Any, List, Optional, Sequence

from flask import Flask, jsonify, Response, current_app
from werkzeug.exceptions import HTTPException, Forbidden, Unauthorized

from . import config, identity
from .services import decision

logger = logging.getLogger(__name__)


def jsonify_exception(error: HTTPException) -> Response:
    """Render an HTTP exception as ``{"reason": ...}``."""
    exc_resp = error.get_response()
    response: Response = jsonify(reason=error.description)
    response.status_code = exc_resp.status_code
    return response


class AuthZen(object):
    """
    Configures AuthZEN access checks on a Flask application.

    Intended for use in a Flask application factory, for example:

    .. code-block:: python

       from flask import Flask
       from authzen import AuthZen
       from someapp import routes


       def create_web_app() -> Flask:
          app = Flask('someapp')
          app.config.from_pyfile('config.py')
          AuthZen(app)
          app.register_blueprint(routes.blueprint)
          return app

    """

    def __init__(self, app: Optional[Flask] = None,
                 resolvers: Optional[Sequence[identity.Resolver]] = None) \
            -> None:
        """
        Initialize ``app`` for access checks.

        Parameters
        ----------
        app : :class:`Flask`
        resolvers : list
            Ordered identity resolvers (see :mod:`authzen.identity`). If not
            provided, the chain is derived from the application config.

        """
        self._resolvers = list(resolvers) if resolvers is not None else None
        if app is not None:
            self.init_app(app)

    @property
    def resolvers(self) -> List[identity.Resolver]:
        """The identity resolver chain for the current application."""
        if self._resolvers is not None:
            return self._resolvers
        return identity.default_resolvers(current_app.config)

    def init_app(self, app: Flask) -> None:
        """
        Set configuration defaults and register error handlers.

        Parameters
        ----------
        app : :class:`Flask`

        """
        for key in dir(config):
            if key.isupper():
                app.config.setdefault(key, getattr(config, key))
        decision.init_app(app)
        app.extensions['authzen'] = self

        app.register_error_handler(Unauthorized, jsonify_exception)
        app.register_error_handler(Forbidden, jsonify_exception)

        if app.config.get('AUTHZEN_FALLBACK_SUBJECT'):
            logger.warning('Fallback subject is configured; it is honored '
                           'only in testing mode')

        @app.teardown_appcontext
        def teardown_appcontext(*args: Any, **kwargs: Any) -> None:
            decision.close_session()
