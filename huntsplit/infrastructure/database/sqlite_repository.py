import sqlite3
from typing import List, Optional
from contextlib import closing
from datetime import date, datetime
from huntsplit.domain.entities import Hunt, Item, Monster, Expense
from huntsplit.domain.errors import HuntCodeConflict, StaleHuntError
from huntsplit.application.interfaces.repository import HuntRepository

DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def month_bounds(today: date):
    start = today.replace(day=1)
    if start.month == 12:
        end = start.replace(year=start.year + 1, month=1)
    else:
        end = start.replace(month=start.month + 1)
    return datetime.combine(start, datetime.min.time()), datetime.combine(end, datetime.min.time())


class SQLiteHuntRepository(HuntRepository):
    def __init__(self, db_path: str):
        self.db_path = db_path
        self._init_db()

    def _get_connection(self) -> sqlite3.Connection:
        conn = sqlite3.connect(self.db_path)
        conn.row_factory = sqlite3.Row  # Enable name-based access
        conn.execute("PRAGMA journal_mode=WAL;")
        conn.execute("PRAGMA foreign_keys = ON;")
        return conn

    def _init_db(self):
        with closing(self._get_connection()) as conn:
            conn.execute("""
            CREATE TABLE IF NOT EXISTS Hunts (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                code TEXT UNIQUE NOT NULL,
                data TEXT NOT NULL,
                duracao_min INTEGER,
                loot NUMERIC NOT NULL,
                damage INTEGER,
                healing INTEGER,
                xp_gain INTEGER,
                revision INTEGER NOT NULL DEFAULT 1
            )
            """)
            conn.execute("""
            CREATE TABLE IF NOT EXISTS Hunts_Itens (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                hunt_id INTEGER NOT NULL,
                posicao INTEGER NOT NULL,
                nome TEXT NOT NULL,
                quantidade INTEGER NOT NULL,
                FOREIGN KEY(hunt_id) REFERENCES Hunts(id) ON DELETE CASCADE
            )
            """)
            conn.execute("""
            CREATE TABLE IF NOT EXISTS Hunts_Monstros (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                hunt_id INTEGER NOT NULL,
                posicao INTEGER NOT NULL,
                criatura TEXT NOT NULL,
                quantidade INTEGER NOT NULL,
                FOREIGN KEY(hunt_id) REFERENCES Hunts(id) ON DELETE CASCADE
            )
            """)
            conn.execute("""
            CREATE TABLE IF NOT EXISTS Hunts_Despesas (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                hunt_id INTEGER NOT NULL,
                posicao INTEGER NOT NULL,
                reporter TEXT NOT NULL,
                amount NUMERIC NOT NULL,
                balance NUMERIC NOT NULL,
                UNIQUE(hunt_id, reporter),
                FOREIGN KEY(hunt_id) REFERENCES Hunts(id) ON DELETE CASCADE
            )
            """)
            conn.execute("CREATE INDEX IF NOT EXISTS idx_despesas_reporter ON Hunts_Despesas(reporter)")
            conn.execute("CREATE INDEX IF NOT EXISTS idx_hunts_data ON Hunts(data)")
            conn.execute("""
            CREATE TABLE IF NOT EXISTS Settings (
                key TEXT PRIMARY KEY,
                value TEXT
            )
            """)
            conn.commit()

    def save(self, hunt: Hunt) -> None:
        with closing(self._get_connection()) as conn:
            with conn: # Transaction context
                values = (
                    hunt.date.strftime(DATE_FORMAT), hunt.duration_min, hunt.loot,
                    hunt.damage, hunt.healing, hunt.experience,
                )
                if hunt.revision == 0:
                    try:
                        cur = conn.execute(
                            """
                            INSERT INTO Hunts (data, duracao_min, loot, damage, healing, xp_gain, code, revision)
                            VALUES (?, ?, ?, ?, ?, ?, ?, 1)
                            """,
                            values + (hunt.code,),
                        )
                    except sqlite3.IntegrityError as exc:
                        raise HuntCodeConflict(hunt.code) from exc
                    hunt_id = cur.lastrowid
                else:
                    # Optimistic check: only the revision we loaded may be overwritten
                    cur = conn.execute(
                        """
                        UPDATE Hunts
                        SET data=?, duracao_min=?, loot=?, damage=?, healing=?, xp_gain=?,
                            revision = revision + 1
                        WHERE code = ? AND revision = ?
                        """,
                        values + (hunt.code, hunt.revision),
                    )
                    if cur.rowcount == 0:
                        raise StaleHuntError(hunt.code, hunt.revision)
                    hunt_id = conn.execute("SELECT id FROM Hunts WHERE code = ?", (hunt.code,)).fetchone()["id"]
                    for table in ("Hunts_Itens", "Hunts_Monstros", "Hunts_Despesas"):
                        conn.execute(f"DELETE FROM {table} WHERE hunt_id = ?", (hunt_id,))

                conn.executemany(
                    "INSERT INTO Hunts_Itens (hunt_id, posicao, nome, quantidade) VALUES (?, ?, ?, ?)",
                    [(hunt_id, pos, i.name, i.amount) for pos, i in enumerate(hunt.items)],
                )
                conn.executemany(
                    "INSERT INTO Hunts_Monstros (hunt_id, posicao, criatura, quantidade) VALUES (?, ?, ?, ?)",
                    [(hunt_id, pos, m.name, m.amount) for pos, m in enumerate(hunt.monsters)],
                )
                conn.executemany(
                    "INSERT INTO Hunts_Despesas (hunt_id, posicao, reporter, amount, balance) VALUES (?, ?, ?, ?, ?)",
                    [(hunt_id, pos, e.reporter, e.amount, e.balance) for pos, e in enumerate(hunt.expenses)],
                )
        hunt.revision += 1

    def _row_to_hunt(self, conn: sqlite3.Connection, row) -> Hunt:
        hunt_id = row["id"]
        items = [
            Item(name=r["nome"], amount=r["quantidade"])
            for r in conn.execute(
                "SELECT nome, quantidade FROM Hunts_Itens WHERE hunt_id = ? ORDER BY posicao", (hunt_id,)
            )
        ]
        monsters = [
            Monster(name=r["criatura"], amount=r["quantidade"])
            for r in conn.execute(
                "SELECT criatura, quantidade FROM Hunts_Monstros WHERE hunt_id = ? ORDER BY posicao", (hunt_id,)
            )
        ]
        expenses = [
            Expense(reporter=r["reporter"], amount=r["amount"], balance=r["balance"])
            for r in conn.execute(
                "SELECT reporter, amount, balance FROM Hunts_Despesas WHERE hunt_id = ? ORDER BY posicao", (hunt_id,)
            )
        ]
        return Hunt(
            code=row["code"],
            loot=row["loot"],
            date=datetime.strptime(row["data"], DATE_FORMAT),
            duration_min=row["duracao_min"],
            damage=row["damage"],
            healing=row["healing"],
            experience=row["xp_gain"],
            items=items,
            monsters=monsters,
            expenses=expenses,
            revision=row["revision"],
        )

    def _query(self, where: List[str], params: list) -> List[Hunt]:
        where_sql = ("WHERE " + " AND ".join(where)) if where else ""
        sql = f"""
            SELECT h.* FROM Hunts h
            {where_sql}
            ORDER BY h.data, h.id
        """
        with closing(self._get_connection()) as conn:
            rows = conn.execute(sql, params).fetchall()
            return [self._row_to_hunt(conn, row) for row in rows]

    def find_by_code(self, code: str) -> Optional[Hunt]:
        hunts = self._query(["h.code = ?"], [code])
        return hunts[0] if hunts else None

    def find_by_code_and_reporter(self, code: str, reporter: str) -> Optional[Hunt]:
        hunts = self._query(
            ["h.code = ?", "EXISTS (SELECT 1 FROM Hunts_Despesas d WHERE d.hunt_id = h.id AND d.reporter = ?)"],
            [code, reporter],
        )
        return hunts[0] if hunts else None

    def find_by_reporter(
        self,
        reporter: str,
        start: Optional[datetime] = None,
        end: Optional[datetime] = None,
    ) -> List[Hunt]:
        where = ["EXISTS (SELECT 1 FROM Hunts_Despesas d WHERE d.hunt_id = h.id AND d.reporter = ?)"]
        params: list = [reporter]
        if start:
            where.append("h.data >= ?")
            params.append(start.strftime(DATE_FORMAT))
        if end:
            where.append("h.data < ?")
            params.append(end.strftime(DATE_FORMAT))
        return self._query(where, params)

    def find_in_current_month(self, today: Optional[date] = None) -> List[Hunt]:
        start, end = month_bounds(today or date.today())
        return self._query(
            ["h.data >= ?", "h.data < ?"],
            [start.strftime(DATE_FORMAT), end.strftime(DATE_FORMAT)],
        )

    def get_setting(self, key: str) -> Optional[str]:
        with closing(self._get_connection()) as conn:
            cursor = conn.execute("SELECT value FROM Settings WHERE key=?", (key,))
            res = cursor.fetchone()
            return res["value"] if res else None

    def set_setting(self, key: str, value: str) -> None:
        with closing(self._get_connection()) as conn:
            with conn:
                conn.execute(
                    "INSERT INTO Settings (key, value) VALUES (?, ?) "
                    "ON CONFLICT(key) DO UPDATE SET value=excluded.value",
                    (key, value),
                )
