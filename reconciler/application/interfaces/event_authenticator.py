from reconciler.domain.events import Event


class EventAuthenticator:
    def authenticate(self, raw_body: bytes, signature_header: str | None) -> Event:
        """
        Verify the raw body against the signature header, then parse it.

        Raises:
            AuthenticationError: missing/bad signature or stale timestamp.
            InvalidEventPayloadError: authentic body that is not an event.
        """
        raise NotImplementedError
