"""Line-stream extraction of medication records from price-list text.

Two passes run over the same lines:

1. A buffered pass that stitches records which the PDF text layer split across
   lines, or packed several to a line.
2. A salvage pass that retries every price-terminated line on its own and
   keeps whatever code the buffered pass never produced.

Results are collapsed by item code, the last occurrence winning.
"""

from collections.abc import Iterable
from dataclasses import dataclass, field

from medprice.domain.medication import MedicationRecord

from .normalization import normalize_line
from .row_parser import PRICE_TAIL, parse_price_list_row
from .segmentation import segment_line
from .settings import DEFAULT_SETTINGS, ExtractionSettings


@dataclass
class PriceListParseState:
    """Mutable state carried across lines during the buffered pass."""

    settings: ExtractionSettings = DEFAULT_SETTINGS
    buffer: str = ""
    records: list[MedicationRecord] = field(default_factory=list)

    def append(self, text: str) -> None:
        if text:
            self.buffer = f"{self.buffer} {text}" if self.buffer else text

    def try_emit(self) -> bool:
        """Emit the buffer as a record if it parses; the buffer is cleared only on success."""
        record = parse_price_list_row(self.buffer, self.settings)
        if record is None:
            return False
        self.records.append(record)
        self.buffer = ""
        return True

    def flush(self) -> None:
        """Emit the buffer if it parses and clear it either way."""
        if self.buffer:
            self.try_emit()
        self.buffer = ""

    def looks_complete(self) -> bool:
        return len(self.buffer) > self.settings.flush_length or bool(PRICE_TAIL.search(self.buffer))

    def try_early_emit(self) -> None:
        if self.buffer and self.looks_complete():
            self.try_emit()


def is_skipped_line(line: str, settings: ExtractionSettings = DEFAULT_SETTINGS) -> bool:
    """Return True for table headers, page banners and disclaimers."""
    return any(marker in line for marker in settings.skip_markers)


def feed_line(state: PriceListParseState, raw_line: str) -> None:
    """Advance the buffered pass by one raw line."""
    line = normalize_line(raw_line)
    if not line or is_skipped_line(line, state.settings):
        return

    split = segment_line(line)
    if not split.segments:
        state.append(line)
        state.try_early_emit()
        return

    # Text before the first code finishes the previous record, never the next one.
    state.append(split.prefix)
    state.flush()

    for segment in split.segments:
        if not state.buffer:
            state.buffer = segment
        elif state.try_emit():
            state.buffer = segment
        else:
            state.append(segment)
        state.try_early_emit()


def finish(state: PriceListParseState) -> list[MedicationRecord]:
    """Make the final attempt on leftover buffer text and return emitted records."""
    state.flush()
    return state.records


def extract_buffered_records(
    lines: Iterable[str],
    settings: ExtractionSettings = DEFAULT_SETTINGS,
) -> list[MedicationRecord]:
    """Run the buffered pass over a full line stream."""
    state = PriceListParseState(settings=settings)
    for raw_line in lines:
        feed_line(state, raw_line)
    return finish(state)


def salvage_records(
    lines: Iterable[str],
    known_codes: Iterable[str] = (),
    settings: ExtractionSettings = DEFAULT_SETTINGS,
) -> list[MedicationRecord]:
    """Parse each price-terminated line alone, keeping codes not seen before."""
    seen = set(known_codes)
    salvaged: list[MedicationRecord] = []
    for raw_line in lines:
        line = normalize_line(raw_line)
        if not line or not PRICE_TAIL.search(line):
            continue
        record = parse_price_list_row(line, settings)
        if record is not None and record.item_code not in seen:
            salvaged.append(record)
            seen.add(record.item_code)
    return salvaged


def dedupe_by_item_code(records: Iterable[MedicationRecord]) -> list[MedicationRecord]:
    """Collapse records by item code; later records replace earlier ones in place."""
    by_code: dict[str, MedicationRecord] = {}
    for record in records:
        by_code[record.item_code] = record
    return list(by_code.values())


def extract_price_list(
    lines: Iterable[str],
    settings: ExtractionSettings = DEFAULT_SETTINGS,
) -> list[MedicationRecord]:
    """Full extraction: buffered pass, salvage pass, then de-duplication."""
    line_list = list(lines)
    primary = extract_buffered_records(line_list, settings)
    salvaged = salvage_records(line_list, (r.item_code for r in primary), settings)
    return dedupe_by_item_code(primary + salvaged)
