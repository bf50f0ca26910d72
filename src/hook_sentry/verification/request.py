"""Request view consumed by the verifier and header lookup."""

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from starlette.requests import Request


class VerificationRequest(Protocol):
    """What the verifier reads from an inbound HTTP request."""

    @property
    def body(self) -> bytes: ...

    @property
    def client_ip(self) -> str | None: ...

    @property
    def user_agent(self) -> str | None: ...

    def get_header(self, name: str) -> str | None: ...


HeaderSource = Mapping[str, str] | Iterable[tuple[str, str]]


@dataclass(frozen=True)
class InboundRequest:
    """
    Snapshot of an inbound webhook request.

    ``body`` must be the raw bytes captured before any JSON or form decoding.
    Header names are stored case-folded.
    """

    body: bytes
    headers: Mapping[str, str] = field(default_factory=dict)
    client_ip: str | None = None

    def __post_init__(self) -> None:
        folded: dict[str, str] = {}
        for name, value in self.headers.items():
            # First occurrence wins for case variants of one name
            folded.setdefault(name.casefold(), value)
        object.__setattr__(self, "headers", folded)

    @classmethod
    def from_headers(
        cls,
        body: bytes,
        headers: HeaderSource,
        client_ip: str | None = None,
    ) -> "InboundRequest":
        items = headers.items() if isinstance(headers, Mapping) else headers
        folded: dict[str, str] = {}
        for name, value in items:
            # First occurrence wins for repeated headers
            folded.setdefault(name.casefold(), value)
        return cls(body=bytes(body), headers=folded, client_ip=client_ip)

    @classmethod
    async def from_starlette(cls, request: "Request") -> "InboundRequest":
        """Capture body, headers and client address from a FastAPI request."""
        body = await request.body()
        client_ip = request.client.host if request.client else None
        return cls.from_headers(body, request.headers.items(), client_ip=client_ip)

    @property
    def user_agent(self) -> str | None:
        return self.get_header("User-Agent")

    def get_header(self, name: str) -> str | None:
        return self.headers.get(name.casefold())


def extract_header(request: VerificationRequest, name: str) -> str | None:
    """Look up a header case-insensitively; ``None`` when absent."""
    return request.get_header(name)
