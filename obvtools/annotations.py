"""User notes attached to points of a board, kept in an SQLite file next to it."""

from __future__ import annotations

import os
import sqlite3
import sys
from dataclasses import dataclass, field

_CREATE_TABLE = (
    "CREATE TABLE annotations("
    "ID INTEGER PRIMARY KEY AUTOINCREMENT,"
    "VISIBLE INTEGER,"
    "PIN TEXT,"
    "PART TEXT,"
    "NET TEXT,"
    "POSX INTEGER,"
    "POSY INTEGER,"
    "SIDE INTEGER,"
    "NOTE TEXT );"
)

_SELECT_VISIBLE = "SELECT id,side,posx,posy,net,part,pin,note from annotations where visible=1;"


@dataclass
class Annotation:
    id: int
    side: int
    x: float
    y: float
    net: str = ""
    part: str = ""
    pin: str = ""
    note: str = ""
    hovered: bool = False


@dataclass
class Annotations:
    """The annotations of one board file."""

    filename: str | os.PathLike = ""
    debug: bool = False
    annotations: list[Annotation] = field(default_factory=list)

    def __post_init__(self) -> None:
        self._db: sqlite3.Connection | None = None

    def __enter__(self) -> Annotations:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def _debug(self, message: str) -> None:
        if self.debug:
            print(message, file=sys.stderr)

    def _connection(self) -> sqlite3.Connection:
        if self._db is None:
            raise RuntimeError("annotation database is not open")
        return self._db

    def database_path(self) -> str:
        """The board file name with its last '.' turned into '_', plus '.sqlite3'."""
        name = os.fspath(self.filename)
        pos = name.rfind(".")
        if pos != -1:
            name = name[:pos] + "_" + name[pos + 1 :]
        return name + ".sqlite3"

    def init(self) -> None:
        """Create the annotations table unless it already exists."""
        db = self._connection()
        try:
            db.execute(_CREATE_TABLE)
        except sqlite3.Error as exc:
            self._debug(f"SQL error: {exc}")
        else:
            self._debug("Table created successfully")

    def load(self) -> None:
        """Open the database for the board file and read its visible annotations."""
        self.close()
        self._db = sqlite3.connect(self.database_path(), isolation_level=None)
        self._debug("Opened database successfully")
        self.init()
        self.generate_list()

    def close(self) -> None:
        if self._db is not None:
            self._db.close()
            self._db = None

    def generate_list(self) -> None:
        """Refresh ``annotations`` from the rows still marked visible."""
        rows = self._connection().execute(_SELECT_VISIBLE).fetchall()
        self.annotations = []
        for ann_id, side, posx, posy, net, part, pin, note in rows:
            annotation = Annotation(
                id=int(ann_id),
                side=int(side or 0),
                x=float(posx or 0),
                y=float(posy or 0),
                net=net or "",
                part=part or "",
                pin=pin or "",
                note=note or "",
            )
            self._debug(
                f"{annotation.id}({annotation.side}:{annotation.x:f},{annotation.y:f}) "
                f"Net:{annotation.net} Part:{annotation.part} Pin:{annotation.pin}: "
                f"Note:{annotation.note}\nAdded"
            )
            self.annotations.append(annotation)

    def add(self, side: int, x: float, y: float, net: str, part: str, pin: str, note: str) -> int:
        """Store a new visible annotation, position rounded to whole units; return its id."""
        cursor = self._connection().execute(
            "INSERT into annotations ( visible, side, posx, posy, net, part, pin, note ) "
            "values ( 1, ?, ?, ?, ?, ?, ?, ? );",
            (int(side), int(f"{x:.0f}"), int(f"{y:.0f}"), net, part, pin, note),
        )
        self._debug("Records created successfully")
        return int(cursor.lastrowid)

    def remove(self, annotation_id: int) -> None:
        """Hide an annotation; the row stays in the database."""
        self._connection().execute(
            "UPDATE annotations set visible = 0 where id=?;", (int(annotation_id),)
        )
        self._debug("Records created successfully")

    def update(self, annotation_id: int, note: str) -> None:
        """Replace the note text of an annotation."""
        self._connection().execute(
            "UPDATE annotations set note = ? where id=?;", (note, int(annotation_id))
        )
        self._debug("Records created successfully")