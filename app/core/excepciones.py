"""Errores de dominio. Los handlers de app.main los traducen a respuestas HTTP."""


class ErrorDominio(Exception):
    """Base de los errores de negocio; `mensaje` se muestra tal cual al usuario."""

    status_code = 400

    def __init__(self, mensaje: str):
        super().__init__(mensaje)
        self.mensaje = mensaje


class ErrorValidacion(ErrorDominio):
    """Campo obligatorio vacío o con formato inválido. No se escribe nada."""

    status_code = 422


class RegistroNoEncontrado(ErrorDominio):
    status_code = 404


class ConflictoNegocio(ErrorDominio):
    """La operación choca con el estado actual (caso cerrado, horario ocupado...)."""

    status_code = 409


class EliminacionBloqueada(ErrorDominio):
    """Existen registros dependientes; hay que reasignarlos antes de eliminar."""

    status_code = 409

    def __init__(self, mensaje: str, cantidad_bloqueante: int):
        super().__init__(mensaje)
        self.cantidad_bloqueante = cantidad_bloqueante
