"""Erreurs métier, traduites en codes HTTP par les handlers de `app.main`."""


class PortfolioError(RuntimeError):
    pass


class NotFoundError(PortfolioError):
    """Entité absente pour l'identifiant demandé (404)."""


class InvalidStateError(PortfolioError):
    """Opération impossible dans l'état courant, ex. unlike à 0 (409)."""


class ValidationFailure(PortfolioError):
    """Entrée invalide ou contrainte de la base violée (400)."""
