"""Open streaming connections, keyed by session id."""

import asyncio
import logging
import uuid
from typing import Any, Dict, Optional

from ..utils.logging import get_logger, log_with_context


logger = get_logger("ConnectionRegistry")


class Connection:
    """
    Outbound message channel of one SSE client.
    
    Messages pushed with `send` are delivered in order by `receive`. Once
    closed, `receive` returns None and further messages are dropped.
    """
    
    def __init__(self, session_id: str):
        self.session_id = session_id
        self.closed = False
        self._outbox: "asyncio.Queue[Optional[Dict[str, Any]]]" = asyncio.Queue()
    
    def send(self, message: Dict[str, Any]) -> bool:
        """Queue a message for the client; returns False if the connection is closed."""
        if self.closed:
            return False
        self._outbox.put_nowait(message)
        return True
    
    async def receive(self) -> Optional[Dict[str, Any]]:
        """Wait for the next outbound message, or None once the connection is closed."""
        if self.closed and self._outbox.empty():
            return None
        return await self._outbox.get()
    
    def close(self) -> None:
        if self.closed:
            return
        self.closed = True
        self._outbox.put_nowait(None)


class ConnectionRegistry:
    """
    Tracks open streaming connections.
    
    A connection is registered by `open` when its stream starts and removed
    by `close` when the stream ends, whatever the reason.
    """
    
    def __init__(self):
        self._connections: Dict[str, Connection] = {}
    
    def open(self) -> Connection:
        """Create and register a connection under a fresh session id."""
        connection = Connection(uuid.uuid4().hex)
        self._connections[connection.session_id] = connection
        log_with_context(
            logger,
            logging.INFO,
            "Streaming connection opened",
            context={"session_id": connection.session_id, "open_connections": len(self)}
        )
        return connection
    
    def get(self, session_id: str) -> Optional[Connection]:
        return self._connections.get(session_id)
    
    def close(self, session_id: str) -> None:
        """Close and unregister a connection; unknown ids are ignored."""
        connection = self._connections.pop(session_id, None)
        if connection is None:
            return
        connection.close()
        log_with_context(
            logger,
            logging.INFO,
            "Streaming connection closed",
            context={"session_id": session_id, "open_connections": len(self)}
        )
    
    def close_all(self) -> None:
        for session_id in list(self._connections):
            self.close(session_id)

    def __contains__(self, session_id: object) -> bool:
        return session_id in self._connections
    
    def __len__(self) -> int:
        return len(self._connections)
