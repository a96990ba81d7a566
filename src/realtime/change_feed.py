"""
Feed de alterações em memória

Publica um ChangeEvent tipado (tabela, operação, id da linha) para cada
linha gravada, somente depois do commit. O consumidor decide se aplica a
alteração de forma incremental ou se recarrega a lista inteira.

Estratégia:
- after_flush coleta inserts/updates/deletes da unit of work
- updates em massa (UPDATE ... WHERE) são registrados com record()
- after_commit publica; after_rollback descarta
"""
import enum
import logging
import threading
from typing import Callable, Dict, List, Optional, Tuple, Union

from pydantic import BaseModel
from sqlalchemy import event, inspect
from sqlalchemy.orm import Session

from ..models.database import SessionLocal

logger = logging.getLogger(__name__)

_PENDING_KEY = "pending_change_events"


class ChangeOperation(str, enum.Enum):
    INSERT = "insert"
    UPDATE = "update"
    DELETE = "delete"


class ChangeEvent(BaseModel):
    """Evento de alteração de uma linha"""
    table: str
    operation: ChangeOperation
    row_id: Optional[Union[int, str]] = None

    class Config:
        frozen = True


Subscriber = Callable[[ChangeEvent], None]

VALID_FILTERS = {"*", "insert", "update", "delete"}


class ChangeFeed:
    """
    Assinaturas por tabela, filtrando pelo tipo de evento
    ('insert', 'update', 'delete' ou '*')
    """

    def __init__(self):
        self._subscribers: Dict[int, Tuple[str, str, Subscriber]] = {}
        self._next_id = 0
        self._lock = threading.Lock()

        # Estatísticas
        self.published = 0

    def subscribe(self, table: str, callback: Subscriber, event_filter: str = "*") -> Callable[[], None]:
        """
        Registra um assinante

        Args:
            table: nome da tabela ('pedidos', 'notificacoes'...) ou '*' para todas
            callback: recebe cada ChangeEvent publicado
            event_filter: 'insert', 'update', 'delete' ou '*'

        Returns:
            Função que cancela a assinatura
        """
        if event_filter not in VALID_FILTERS:
            raise ValueError(f"Filtro de evento inválido: {event_filter}")

        with self._lock:
            subscription_id = self._next_id
            self._next_id += 1
            self._subscribers[subscription_id] = (table, event_filter, callback)

        def unsubscribe():
            with self._lock:
                self._subscribers.pop(subscription_id, None)

        return unsubscribe

    def publish(self, change: ChangeEvent) -> None:
        with self._lock:
            subscribers = list(self._subscribers.values())

        self.published += 1
        for table, event_filter, callback in subscribers:
            if table not in ("*", change.table):
                continue
            if event_filter not in ("*", change.operation.value):
                continue
            try:
                callback(change)
            except Exception:
                # Um assinante com falha não pode desfazer o que já foi commitado
                logger.exception(f"Assinante do feed falhou ao processar {change}")

    def record(self, session: Session, table: str, operation: ChangeOperation, row_id=None) -> None:
        """Registra uma alteração feita fora da unit of work (UPDATE em massa)"""
        session.info.setdefault(_PENDING_KEY, []).append(
            ChangeEvent(table=table, operation=operation, row_id=row_id)
        )

    def clear(self) -> None:
        with self._lock:
            self._subscribers.clear()

    def get_stats(self) -> dict:
        return {
            "subscribers": len(self._subscribers),
            "published": self.published
        }

    # ------------------------------------------------------------------
    # Integração com a sessão do SQLAlchemy
    # ------------------------------------------------------------------

    def install(self, session_factory) -> None:
        event.listen(session_factory, "after_flush", self._after_flush)
        event.listen(session_factory, "after_commit", self._after_commit)
        event.listen(session_factory, "after_rollback", self._after_rollback)

    def _after_flush(self, session: Session, flush_context) -> None:
        pending: List[ChangeEvent] = session.info.setdefault(_PENDING_KEY, [])
        groups = (
            (session.new, ChangeOperation.INSERT),
            (session.dirty, ChangeOperation.UPDATE),
            (session.deleted, ChangeOperation.DELETE),
        )
        for objects, operation in groups:
            for obj in objects:
                if operation is ChangeOperation.UPDATE and not session.is_modified(obj):
                    continue
                table = getattr(obj, "__tablename__", None)
                if table is None:
                    continue
                pending.append(ChangeEvent(table=table, operation=operation, row_id=_row_id(obj)))

    def _after_commit(self, session: Session) -> None:
        for change in session.info.pop(_PENDING_KEY, []):
            self.publish(change)

    def _after_rollback(self, session: Session) -> None:
        discarded = session.info.pop(_PENDING_KEY, [])
        if discarded:
            logger.debug(f"{len(discarded)} evento(s) descartados no rollback")


def _row_id(obj):
    identity = inspect(obj).identity
    if identity and len(identity) == 1:
        return identity[0]
    return getattr(obj, "id", None)


# Instância global do feed
change_feed = ChangeFeed()
change_feed.install(SessionLocal)
