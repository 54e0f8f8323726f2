"""Serviço do Supabase - Persistência de agendamentos."""

from typing import Any

from src.config.settings import get_settings
from src.contracts.appointment import Appointment
from src.core.errors import PersistenceFailure
from src.utils.logger import get_logger
from supabase import Client, create_client

logger = get_logger(__name__)

APPOINTMENTS_TABLE = "appointments"


class AppointmentStore:
    """Store de agendamentos sobre uma tabela do Supabase.

    Nenhuma operação faz retry: uma falha vira PersistenceFailure e sobe
    para quem chamou.
    """

    def __init__(self, client: Client | None = None) -> None:
        """Inicializa o store.

        Args:
            client: Cliente Supabase opcional. Se não fornecido, é criado no
                primeiro uso a partir das settings.
        """
        self._client = client

    @property
    def client(self) -> Client:
        if self._client is None:
            self._client = self._create_client()
        return self._client

    def _create_client(self) -> Client:
        """Cria um novo cliente Supabase a partir das configurações."""
        settings = get_settings()

        # Prioriza a service key para ignorar RLS (Row Level Security)
        key = settings.supabase_service_key or settings.supabase_key

        if not settings.supabase_url or not key:
            logger.error(
                "supabase_not_configured",
                message="SUPABASE_URL e SUPABASE_KEY são obrigatórios para persistir agendamentos.",
            )
            raise PersistenceFailure("Supabase credentials are not configured")

        try:
            new_client = create_client(settings.supabase_url, key)
        except Exception as e:
            raise PersistenceFailure("Could not create Supabase client") from e

        logger.info(
            "supabase_client_created",
            using_service_key=key == settings.supabase_service_key,
        )
        return new_client

    async def insert_appointment(self, appointment: Appointment) -> dict[str, Any]:
        """Insere um agendamento.

        Args:
            appointment: Agendamento validado.

        Returns:
            Registro criado (com id e created_at gerados pelo banco).

        Raises:
            PersistenceFailure: Se o insert falhar.
        """
        try:
            result = (
                self.client.table(APPOINTMENTS_TABLE)
                .insert(appointment.to_row())
                .execute()
            )
        except PersistenceFailure:
            raise
        except Exception as e:
            logger.error("appointment_insert_failed", error=str(e))
            raise PersistenceFailure("Failed to insert appointment") from e

        if not result or not result.data:
            raise PersistenceFailure("Insert returned no data")

        row = result.data[0]
        logger.info("appointment_created", appointment_id=row.get("id"))
        return row

    async def list_appointments(self) -> list[dict[str, Any]]:
        """Lista todos os agendamentos, na forma em que estão na tabela.

        Raises:
            PersistenceFailure: Se a consulta falhar.
        """
        try:
            result = self.client.table(APPOINTMENTS_TABLE).select("*").execute()
        except PersistenceFailure:
            raise
        except Exception as e:
            logger.error("appointments_fetch_failed", error=str(e))
            raise PersistenceFailure("Failed to list appointments") from e

        logger.info("appointments_fetched", count=len(result.data))
        return result.data

    async def ping(self) -> None:
        """Verifica se o banco responde.

        Raises:
            PersistenceFailure: Se o banco estiver inacessível.
        """
        try:
            self.client.table(APPOINTMENTS_TABLE).select("id").limit(1).execute()
        except PersistenceFailure:
            raise
        except Exception as e:
            logger.error("store_ping_failed", error=str(e))
            raise PersistenceFailure("Store is unreachable") from e


_appointment_store: AppointmentStore | None = None


def get_appointment_store() -> AppointmentStore:
    """Retorna ou cria a instância global do store.

    O cliente do Supabase cuida do próprio pool de conexões.
    """
    global _appointment_store
    if _appointment_store is None:
        _appointment_store = AppointmentStore()
    return _appointment_store
