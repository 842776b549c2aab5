from __future__ import annotations

from dataclasses import dataclass
from uuid import UUID, uuid4


@dataclass(frozen=True, slots=True)
class Certificate:
    """An issued certificate, owned by its recipient for its whole life."""

    id: UUID
    name: str
    description: str
    image_url: str
    recipient: str
    issuer: str
    issue_date: int  # epoch milliseconds
    certificate_type: str
    metadata: str  # opaque, often JSON; never parsed here

    @property
    def owner(self) -> str:
        return self.recipient

    @staticmethod
    def new(
        *,
        name: str,
        description: str,
        image_url: str,
        recipient: str,
        issuer: str,
        issue_date: int,
        certificate_type: str,
        metadata: str,
    ) -> Certificate:
        return Certificate(
            id=uuid4(),
            name=name,
            description=description,
            image_url=image_url,
            recipient=recipient,
            issuer=issuer,
            issue_date=issue_date,
            certificate_type=certificate_type,
            metadata=metadata,
        )
