import logging
import re
from dataclasses import dataclass

from tickerpi.station.altitude import SEA_LEVEL_STANDARD_HPA
from tickerpi.station.interfaces import FetchError, HttpClient, NetworkLink


logger = logging.getLogger(__name__)

# QNH group of a METAR, e.g. "Q1019". Inches-of-mercury groups ("A2992") are not handled.
QNH_TOKEN_RE = re.compile(r"(?:^| )Q(\d{4})(?!\d)", re.MULTILINE)


def parse_qnh(text):
    match = QNH_TOKEN_RE.search(text or "")
    if match is None:
        return None
    return float(match.group(1))


@dataclass
class ReferencePressureFetcher:
    http: HttpClient
    network: NetworkLink
    url: str
    fallback_hpa: float = SEA_LEVEL_STANDARD_HPA

    def fetch_sea_level_pressure(self):
        if not self.network.is_connected():
            logger.debug("Network unreachable; using standard QNH %.2f", self.fallback_hpa)
            return self.fallback_hpa

        try:
            response = self.http.get(self.url)
        except FetchError as exc:
            logger.debug("QNH fetch failed (%s); using standard QNH", exc)
            return self.fallback_hpa

        if not response.ok:
            logger.debug("QNH feed returned HTTP %s; using standard QNH", response.status_code)
            return self.fallback_hpa

        qnh = parse_qnh(response.text)
        if qnh is None:
            logger.debug("No Q#### group in QNH feed; using standard QNH")
            return self.fallback_hpa
        return qnh
