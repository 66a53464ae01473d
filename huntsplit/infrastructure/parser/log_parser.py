import re
from typing import Any, List, Tuple

from huntsplit.domain.entities import Item, Monster, SessionReport
from huntsplit.domain.errors import InvalidSessionReport

ENTRY_PATTERN = re.compile(r'^\s*(\d+)\s*x\s+(.+?)\s*$', re.MULTILINE | re.IGNORECASE)


class LogParser:
    @staticmethod
    def safe_int(value: Any) -> int:
        try:
            return int(value)
        except (TypeError, ValueError):
            try:
                return int(float(value))
            except (TypeError, ValueError):
                return 0

    @staticmethod
    def _search(text: str, pattern: str, flags=0, default="0") -> str:
        m = re.search(pattern, text, flags)
        if not m:
            return default
        val = m.group(1)
        val = val.replace(",", "").replace("−", "-").replace("–", "-").strip()
        return val

    def _extract_block(self, text: str, header: str, stop: str) -> List[Tuple[str, int]]:
        m = re.search(rf"{header}:\s*(.*?)(?:{stop}|$)", text, re.DOTALL | re.IGNORECASE)
        chunk = m.group(1) if m else ""
        return [(name.strip(), self.safe_int(qty)) for qty, name in ENTRY_PATTERN.findall(chunk)]

    def extract_monsters(self, text: str) -> List[Monster]:
        return [Monster(name=n, amount=q) for n, q in self._extract_block(text, "Killed Monsters", "Looted Items:")]

    def extract_items(self, text: str) -> List[Item]:
        return [Item(name=n, amount=q) for n, q in self._extract_block(text, "Looted Items", "Killed Monsters:")]

    def parse_session(self, text: str, reporter: str) -> SessionReport:
        start_date = self._search(text, r"From\s+(\d{4}-\d{2}-\d{2}),", default="")
        start_hour = self._search(text, r"From\s+\d{4}-\d{2}-\d{2},\s+(\d{2}:\d{2}:\d{2})", default="")
        if not start_date or not start_hour:
            raise InvalidSessionReport("Session start time not found in hunt log")

        m = re.search(r"Session:\s+(\d{2,}:\d{2})h", text)
        session_time = m.group(1) if m else "00:00"

        return SessionReport(
            reporter=reporter,
            session_start_time=f"{start_date} {start_hour}",
            session_time=session_time,
            loot=self.safe_int(self._search(text, r"^Loot:\s*([-\d,−–]+)", flags=re.MULTILINE)),
            supplies=self.safe_int(self._search(text, r"Supplies:\s*([-\d,−–]+)")),
            damage=self.safe_int(self._search(text, r"^Damage:\s*([-\d,−–]+)", flags=re.MULTILINE)),
            healing=self.safe_int(self._search(text, r"^Healing:\s*([-\d,−–]+)", flags=re.MULTILINE)),
            xp=self.safe_int(self._search(text, r"^XP Gain:\s*([\d,.]+)", flags=re.MULTILINE)),
            loot_items=self.extract_items(text),
            monsters=self.extract_monsters(text),
        )
