import logging

from anthropic_api.models.messages import MessagesRequest, MessagesResponse
from anthropic_api.resources.base import Resource
from anthropic_api.streaming import STREAM_BUFFER_SIZE, MessageStream

logger = logging.getLogger(__name__)

MESSAGES_ROUTE = "messages"


class Messages(Resource):
    """The Messages endpoint, as a single response or as an event stream."""

    async def create(self, request: MessagesRequest) -> MessagesResponse:
        """
        Send a conversation and wait for the complete reply.

        Args:
            request: The request body; its stream flag is cleared if set

        Returns:
            The complete response message

        Raises:
            APIConnectionError: the request never produced a response
            APIError: server returned an error envelope
            ResponseDecodeError: response did not match the schema
        """
        if request.stream:
            request = request.model_copy(update={"stream": None})
        return await self._post(MESSAGES_ROUTE, MessagesResponse, request)

    async def create_stream(
        self, request: MessagesRequest, max_buffered: int = STREAM_BUFFER_SIZE
    ) -> MessageStream:
        """
        Send a conversation and relay the reply as it is generated.

        The stream flag is forced on regardless of the request. Opening
        failures (connection errors, non-2xx statuses) are raised here;
        failures after the stream is open are raised while iterating it.

        Args:
            request: The request body
            max_buffered: Decoded events held before the reader pauses

        Returns:
            MessageStream owning the open connection
        """
        if max_buffered < 1:
            raise ValueError("max_buffered must be at least 1")
        request = request.model_copy(update={"stream": True})
        response = await self._transport.open_stream(MESSAGES_ROUTE, request)
        logger.debug(f"Opened message stream for model {request.model}")
        try:
            return MessageStream.from_response(
                response,
                policy=self._transport.unknown_block_policy,
                max_buffered=max_buffered,
            )
        except BaseException:
            await response.aclose()
            raise
