"""base exporter interface."""

from abc import ABC, abstractmethod

from groupcontent.core.models import GroupContent


class Exporter(ABC):  # pylint: disable=too-few-public-methods
    """abstract base class for rendered fragment exporters."""

    @abstractmethod
    def export(
        self,
        entity: GroupContent,
        html: str,
        destination: str,
        dry_run: bool = False,
        overwrite: bool = False,
    ) -> None:
        """
        Export a rendered fragment to the destination.

        Args:
            entity: The entity the fragment was rendered from
            html: The rendered HTML fragment
            destination: Where to write the export (interpretation varies by exporter)
            dry_run: If True, don't actually write anything
            overwrite: If True, overwrite existing content
        """
        ...  # pylint: disable=unnecessary-ellipsis
