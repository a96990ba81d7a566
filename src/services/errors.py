"""
Erros de domínio

Cada erro carrega o status HTTP e um código estável que o handler
registrado em main.py devolve ao cliente.
"""
from fastapi import status


class DomainError(Exception):
    status_code = status.HTTP_400_BAD_REQUEST
    code = "domain_error"

    def __init__(self, detail: str):
        super().__init__(detail)
        self.detail = detail


class NotFoundError(DomainError):
    status_code = status.HTTP_404_NOT_FOUND
    code = "not_found"


class PermissionDeniedError(DomainError):
    status_code = status.HTTP_403_FORBIDDEN
    code = "forbidden"


class ValidationError(DomainError):
    status_code = 422
    code = "validation_error"


class InsufficientStockError(DomainError):
    status_code = status.HTTP_409_CONFLICT
    code = "insufficient_stock"

    def __init__(self, produto_id: int, solicitado: int, disponivel: int = None):
        self.produto_id = produto_id
        self.solicitado = solicitado
        self.disponivel = disponivel
        detail = f"Estoque insuficiente para o produto {produto_id}: solicitado {solicitado}"
        if disponivel is not None:
            detail += f", disponível {disponivel}"
        super().__init__(detail)


class InvalidTransitionError(DomainError):
    status_code = status.HTTP_409_CONFLICT
    code = "invalid_transition"

    def __init__(self, pedido_id: int, de: str, para: str):
        self.pedido_id = pedido_id
        self.de = de
        self.para = para
        super().__init__(f"Pedido {pedido_id} não pode passar de '{de}' para '{para}'")


class DuplicateSkuError(DomainError):
    status_code = status.HTTP_409_CONFLICT
    code = "duplicate_sku"
