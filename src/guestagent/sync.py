"""Channel resynchronization: guest-sync, guest-sync-delimited, guest-ping."""

from __future__ import annotations

from .log import slog
from .session import TransportSession


class SyncGate:
    """Echo handlers the controller uses to realign its read cursor.

    Args:
        session: Transport session that owns the delimited flag.
    """

    def __init__(self, session: TransportSession):
        self.session = session

    def sync(self, token: int) -> int:
        """Echo ``token``. Used when the channel is believed clean."""
        return token

    def sync_delimited(self, token: int) -> int:
        """Echo ``token`` and have the framer delimit the response.

        The flag is set before returning, so the framer sees it when
        it writes this very response.
        """
        self.session.set_response_delimited()
        return token

    def ping(self) -> None:
        slog("guest-ping called")
