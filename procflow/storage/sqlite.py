"""SQLite storage for flow documents and simulation settings."""

import sqlite3
from pathlib import Path

from procflow.models.flow import FlowData
from procflow.models.simulation import SimulationParams
from procflow.storage.base import FlowStorage

_SETTINGS_KEY = "simulation"


class SqliteFlowStorage(FlowStorage):
    """Stores each flow as a JSON document row."""

    def __init__(self, path: Path | str) -> None:
        self.path = Path(path)
        self.init_db()

    def _connect(self) -> sqlite3.Connection:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        conn = sqlite3.connect(self.path)
        conn.row_factory = sqlite3.Row
        return conn

    def init_db(self) -> None:
        with self._connect() as conn:
            conn.execute(
                """
                create table if not exists flows (
                    seq integer primary key autoincrement,
                    flow_id text not null unique,
                    name text not null,
                    flow_json text not null,
                    created_at text not null,
                    updated_at text not null
                )
                """
            )
            conn.execute(
                """
                create table if not exists settings (
                    key text primary key,
                    value_json text not null
                )
                """
            )
            conn.commit()

    def list_flows(self) -> list[FlowData]:
        with self._connect() as conn:
            rows = conn.execute("select flow_json from flows order by seq").fetchall()
        return [FlowData.model_validate_json(row["flow_json"]) for row in rows]

    def get_flow(self, flow_id: str) -> FlowData | None:
        with self._connect() as conn:
            row = conn.execute(
                "select flow_json from flows where flow_id = ?",
                (flow_id,),
            ).fetchone()
        if not row:
            return None
        return FlowData.model_validate_json(row["flow_json"])

    def put_flow(self, flow: FlowData) -> None:
        """Insert or update a flow, keeping its original position in the list."""
        with self._connect() as conn:
            conn.execute(
                """
                insert into flows (flow_id, name, flow_json, created_at, updated_at)
                values (?, ?, ?, ?, ?)
                on conflict(flow_id) do update set
                    name = excluded.name,
                    flow_json = excluded.flow_json,
                    updated_at = excluded.updated_at
                """,
                (
                    flow.id,
                    flow.name,
                    flow.model_dump_json(by_alias=True, exclude_none=True),
                    flow.created_at,
                    flow.updated_at,
                ),
            )
            conn.commit()

    def delete_flow(self, flow_id: str) -> None:
        with self._connect() as conn:
            conn.execute("delete from flows where flow_id = ?", (flow_id,))
            conn.commit()

    def get_settings(self) -> SimulationParams | None:
        with self._connect() as conn:
            row = conn.execute(
                "select value_json from settings where key = ?",
                (_SETTINGS_KEY,),
            ).fetchone()
        if not row:
            return None
        return SimulationParams.model_validate_json(row["value_json"])

    def put_settings(self, params: SimulationParams) -> None:
        with self._connect() as conn:
            conn.execute(
                """
                insert into settings (key, value_json) values (?, ?)
                on conflict(key) do update set value_json = excluded.value_json
                """,
                (_SETTINGS_KEY, params.model_dump_json(by_alias=True)),
            )
            conn.commit()
