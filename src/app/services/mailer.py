from abc import ABC, abstractmethod
from dataclasses import dataclass


@dataclass(frozen=True)
class MailOptions:
    """Delivery options for a single message"""

    to: str
    subject: str


class IMailer(ABC):
    """Outbound email - application layer"""

    @abstractmethod
    async def send_mail(
        self, template: str, context: dict, options: MailOptions, mode: str = "text"
    ) -> bool:
        """
        Render ``template`` with ``context`` and deliver it.

        Args:
            template: Template name, e.g. "reset-password"
            context: Values available to the template
            options: Recipient and subject
            mode: "html" or "text"

        Returns:
            True if the message was handed to the transport
        """
        pass
