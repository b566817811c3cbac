"""The server event stream (``GET /event``)."""

from typing import Optional

from opencode_client.models.event import Event
from opencode_client.params import DirectoryParams
from opencode_client.request import RequestOptions
from opencode_client.resources.base import APIResource
from opencode_client.streaming import Stream


class EventResource(APIResource):
    """``client.event``."""

    def stream(self, params: Optional[DirectoryParams] = None, *options: RequestOptions) -> Stream[Event]:
        """Subscribe to server events.

        The connection stays open until the stream is closed; use it as a
        context manager::

            with client.event.stream() as events:
                for event in events:
                    if event.type == EventType.SESSION_IDLE:
                        break

        Connection failures and error statuses do not raise here: they are
        reported through :meth:`Stream.err` and the first :meth:`Stream.next`
        returns False.

        Returns
        -------
        Stream[Event]
        """
        return self._executor.stream("GET", "event", params, Event.decode, *options)
