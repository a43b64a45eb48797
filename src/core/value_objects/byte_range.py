"""
Objet valeur pour une plage d'octets HTTP (bornes inclusives).
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class ByteRange:
    """
    Plage d'octets [start, end], bornes inclusives comme en HTTP.

    Attributs:
        start: Premier octet
        end: Dernier octet (inclus)
    """

    start: int
    end: int

    @property
    def length(self) -> int:
        """Nombre d'octets couverts par la plage."""
        return self.end - self.start + 1

    def header_value(self) -> str:
        """Valeur pour l'en-tête Range d'une requête amont."""
        return f"bytes={self.start}-{self.end}"

    def content_range(self, total: int) -> str:
        """Valeur de l'en-tête Content-Range d'une réponse 206."""
        return f"bytes {self.start}-{self.end}/{total}"
