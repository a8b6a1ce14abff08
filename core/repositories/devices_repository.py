"""
core/repositories/devices_repository.py
Persistência dos dispositivos no SQLite.

Tabela gerenciada:
    devices — um registro por Device, chave primária = Device.id

Uma conexão por chamada: seguro para threads de worker do Flask sem
compartilhar conexão.
"""

from __future__ import annotations

import sqlite3
from pathlib import Path
from typing import Any

from core.constants import DB_PATH
from core.schemas import Device

_COLUMNS: tuple[str, ...] = (
    "id",
    "name",
    "ip_address",
    "device_type",
    "status",
    "cpu_usage",
    "memory_usage",
    "metrics_updated_at",
    "created_at",
    "mac_address",
    "interface_status",
    "protocol",
)


def _to_row(device: Device) -> tuple[Any, ...]:
    data = device.model_dump(mode="json")
    return tuple(data[column] for column in _COLUMNS)


def _from_row(row: sqlite3.Row) -> Device:
    return Device.model_validate(dict(row))


class DeviceRepository:
    """
    Repositório chave-valor de Device (save / find / delete por id).

    Args:
        db_path: Arquivo SQLite. Padrão: ``core.constants.DB_PATH``.
    """

    def __init__(self, db_path: Path | str = DB_PATH) -> None:
        self.db_path = Path(db_path)
        self.ensure_table()

    # ── Conexão ───────────────────────────────────────────────────────────────

    def _connect(self) -> sqlite3.Connection:
        self.db_path.parent.mkdir(parents=True, exist_ok=True)
        conn = sqlite3.connect(self.db_path)
        conn.row_factory = sqlite3.Row
        return conn

    def ensure_table(self) -> None:
        with self._connect() as conn:
            conn.execute(
                """
                CREATE TABLE IF NOT EXISTS devices (
                    id                 TEXT PRIMARY KEY,
                    name               TEXT NOT NULL,
                    ip_address         TEXT NOT NULL,
                    device_type        TEXT NOT NULL,
                    status             TEXT NOT NULL,
                    cpu_usage          REAL NOT NULL DEFAULT 0,
                    memory_usage       REAL NOT NULL DEFAULT 0,
                    metrics_updated_at TEXT,
                    created_at         TEXT NOT NULL,
                    mac_address        TEXT,
                    interface_status   TEXT,
                    protocol           TEXT
                )
                """
            )
            conn.execute(
                "CREATE INDEX IF NOT EXISTS idx_devices_ip ON devices(ip_address)"
            )
            conn.commit()

    # ── CRUD ──────────────────────────────────────────────────────────────────

    def save(self, device: Device) -> Device:
        """Insere ou substitui o registro de ``device.id``."""
        placeholders = ", ".join("?" for _ in _COLUMNS)
        updates = ", ".join(
            f"{column} = excluded.{column}"
            for column in _COLUMNS
            if column != "id"
        )
        with self._connect() as conn:
            conn.execute(
                f"""
                INSERT INTO devices ({", ".join(_COLUMNS)})
                VALUES ({placeholders})
                ON CONFLICT(id) DO UPDATE SET {updates}
                """,
                _to_row(device),
            )
            conn.commit()
        return device

    def find_by_id(self, device_id: str) -> Device | None:
        with self._connect() as conn:
            row = conn.execute(
                f"SELECT {', '.join(_COLUMNS)} FROM devices WHERE id = ?",
                (device_id,),
            ).fetchone()
        return _from_row(row) if row else None

    def exists_by_id(self, device_id: str) -> bool:
        with self._connect() as conn:
            row = conn.execute(
                "SELECT 1 FROM devices WHERE id = ? LIMIT 1",
                (device_id,),
            ).fetchone()
        return row is not None

    def delete_by_id(self, device_id: str) -> bool:
        """Remove o registro. Retorna False se o id não existia."""
        with self._connect() as conn:
            cursor = conn.execute(
                "DELETE FROM devices WHERE id = ?",
                (device_id,),
            )
            conn.commit()
        return cursor.rowcount > 0

    def find_all(self) -> list[Device]:
        with self._connect() as conn:
            rows = conn.execute(
                f"""
                SELECT {', '.join(_COLUMNS)}
                FROM devices
                ORDER BY created_at, name
                """
            ).fetchall()
        return [_from_row(row) for row in rows]
