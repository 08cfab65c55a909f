from __future__ import annotations

import csv
import io
import logging
import sqlite3
from dataclasses import asdict, dataclass
from datetime import date, datetime
from pathlib import Path
from typing import Dict, List, Mapping, Optional, Tuple

from flask import (
    Flask,
    Response,
    current_app,
    flash,
    g,
    jsonify,
    redirect,
    render_template,
    request,
    session,
    url_for,
)
from werkzeug.security import check_password_hash, generate_password_hash

from tracker.aggregator import (
    STATUS_LABELS,
    STATUS_PENDING,
    STATUSES,
    ActivityRecord,
    PeriodRange,
    bucket_by_month,
    bucket_by_week,
    current_week,
    is_known_status,
    minutes_to_hours,
    minutes_to_label,
    normalize_status,
    parse_record_date,
    split_minutes,
    summarize,
    tally_tags,
    tally_tools,
    top_labels,
)

DATABASE_NAME = "tracker.db"

EXPORT_COLUMNS = [
    "Date",
    "Status",
    "Time Spent (hours)",
    "Summary",
    "Challenges",
    "Remarks",
    "Achievements",
    "Skills & Tools",
    "Tags",
    "Created At",
    "Updated At",
]

SEARCH_FIELDS = ("summary", "achievements", "remarks", "challenges")


def status_label(status: str) -> str:
    return STATUS_LABELS.get(normalize_status(status), status)


def create_app(test_config: Optional[Mapping[str, object]] = None) -> Flask:
    app = Flask(__name__, instance_relative_config=True)
    app.config.update(
        SECRET_KEY="change-me",
        DATABASE=str(Path(app.instance_path) / DATABASE_NAME),
        RECENT_ENTRY_COUNT=3,
        TOP_TAG_COUNT=12,
        TOP_TOOL_COUNT=5,
        TODAY=None,
    )
    app.config.from_prefixed_env("TRACKER")
    if test_config is not None:
        app.config.update(test_config)

    app.jinja_env.filters["minutes_to_label"] = minutes_to_label
    app.jinja_env.filters["minutes_to_hours"] = minutes_to_hours
    app.jinja_env.filters["status_label"] = status_label

    Path(app.config["DATABASE"]).parent.mkdir(parents=True, exist_ok=True)

    @app.before_request
    def load_logged_in_user() -> None:
        g.db = get_db()
        user_id = session.get("user_id")
        if user_id is None:
            g.user = None
        else:
            g.user = get_user_by_id(user_id)

    @app.teardown_appcontext
    def close_db(exception: Optional[BaseException]) -> None:  # pragma: no cover - teardown
        db = g.pop("db", None)
        if db is not None:
            db.close()

    register_routes(app)
    with app.app_context():
        init_db()
    return app


def get_db() -> sqlite3.Connection:
    if "db" not in g:
        conn = sqlite3.connect(current_app.config["DATABASE"])
        conn.row_factory = sqlite3.Row
        conn.execute("PRAGMA foreign_keys = ON")
        g.db = conn
    return g.db


def init_db() -> None:
    conn = sqlite3.connect(current_app.config["DATABASE"])
    try:
        conn.executescript(
            """
            CREATE TABLE IF NOT EXISTS users (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                email TEXT UNIQUE NOT NULL,
                full_name TEXT NOT NULL,
                company_name TEXT NOT NULL DEFAULT '',
                start_date TEXT,
                end_date TEXT,
                password_hash TEXT NOT NULL,
                created_at TEXT NOT NULL,
                updated_at TEXT NOT NULL
            );

            CREATE TABLE IF NOT EXISTS entries (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                user_id INTEGER NOT NULL,
                entry_date TEXT NOT NULL,
                summary TEXT NOT NULL,
                achievements TEXT NOT NULL DEFAULT '',
                challenges TEXT NOT NULL DEFAULT '',
                remarks TEXT NOT NULL DEFAULT '',
                status TEXT NOT NULL DEFAULT 'pending',
                skills_tools TEXT NOT NULL DEFAULT '',
                tags TEXT NOT NULL DEFAULT '',
                duration_minutes INTEGER NOT NULL DEFAULT 0,
                created_at TEXT NOT NULL,
                updated_at TEXT NOT NULL,
                FOREIGN KEY(user_id) REFERENCES users(id) ON DELETE CASCADE
            );

            CREATE INDEX IF NOT EXISTS idx_entries_user_date ON entries(user_id, entry_date);
            """
        )
        conn.commit()
    finally:
        conn.close()


def get_user_by_id(user_id: int) -> Optional[sqlite3.Row]:
    return g.db.execute("SELECT * FROM users WHERE id = ?", (user_id,)).fetchone()


def today() -> date:
    configured = current_app.config.get("TODAY")
    if configured:
        parsed = parse_record_date(configured)
        if parsed is not None:
            return parsed
        current_app.logger.warning("Ignoring unparseable TODAY setting %r", configured)
    return date.today()


def _now() -> str:
    return datetime.utcnow().isoformat(timespec="seconds")


def register_routes(app: Flask) -> None:
    @app.route("/")
    def index():
        if g.user:
            return redirect(url_for("dashboard"))
        return redirect(url_for("login"))

    @app.route("/register", methods=["GET", "POST"])
    def register():
        if request.method == "POST":
            email = request.form.get("email", "").strip().lower()
            full_name = request.form.get("full_name", "").strip()
            password = request.form.get("password", "")
            confirm_password = request.form.get("confirm_password", "")

            error = None
            if not email:
                error = "Email is required."
            elif not full_name:
                error = "Name is required."
            elif not password:
                error = "Password is required."
            elif password != confirm_password:
                error = "Passwords do not match."
            elif user_exists(email):
                error = "Email already registered."

            if error:
                flash(error, "error")
            else:
                password_hash = generate_password_hash(password)
                now = _now()
                g.db.execute(
                    """
                    INSERT INTO users (email, full_name, password_hash, created_at, updated_at)
                    VALUES (?, ?, ?, ?, ?)
                    """,
                    (email, full_name, password_hash, now, now),
                )
                g.db.commit()
                app.logger.info("Registered user %s", email)
                flash("Registration successful. Please log in.", "success")
                return redirect(url_for("login"))

        return render_template("register.html")

    @app.route("/login", methods=["GET", "POST"])
    def login():
        if g.user:
            return redirect(url_for("dashboard"))
        if request.method == "POST":
            email = request.form.get("email", "").strip().lower()
            password = request.form.get("password", "")
            error = None

            user = g.db.execute("SELECT * FROM users WHERE email = ?", (email,)).fetchone()
            if user is None or not check_password_hash(user["password_hash"], password):
                error = "Invalid email or password."

            if error:
                app.logger.info("Failed login for %s", email)
                flash(error, "error")
            else:
                session.clear()
                session["user_id"] = user["id"]
                return redirect(url_for("dashboard"))

        return render_template("login.html")

    @app.route("/logout")
    def logout():
        session.clear()
        return redirect(url_for("login"))

    @app.route("/dashboard")
    def dashboard():
        if g.user is None:
            return redirect(url_for("login"))

        entries = fetch_entries(g.user["id"])
        records = [entry.to_record() for entry in entries]
        summary = summarize(records)
        week = current_week(records, today())
        recent = entries[: current_app.config["RECENT_ENTRY_COUNT"]]

        return render_template(
            "dashboard.html",
            user=g.user,
            full_name=g.user["full_name"] or "Intern",
            company_name=g.user["company_name"] or "Your Company",
            summary=summary,
            week=week,
            recent_entries=recent,
        )

    @app.route("/entries")
    def entries():
        if g.user is None:
            return redirect(url_for("login"))

        query = request.args.get("q", "").strip()
        rows = filter_entries(fetch_entries(g.user["id"]), query)
        return render_template("entries.html", entries=rows, query=query)

    @app.route("/entries/new")
    def new_entry():
        if g.user is None:
            return redirect(url_for("login"))
        return render_template(
            "entry_form.html",
            entry=None,
            form=blank_entry_form(today()),
            statuses=STATUSES,
        )

    @app.route("/entries/<int:entry_id>")
    def entry_detail(entry_id: int):
        if g.user is None:
            return redirect(url_for("login"))

        entry = fetch_entry(entry_id, g.user["id"])
        if entry is None:
            flash("Entry not found.", "error")
            return redirect(url_for("entries"))
        return render_template("entry_detail.html", entry=entry)

    @app.route("/entries/<int:entry_id>/edit")
    def edit_entry(entry_id: int):
        if g.user is None:
            return redirect(url_for("login"))

        entry = fetch_entry(entry_id, g.user["id"])
        if entry is None:
            flash("Entry not found.", "error")
            return redirect(url_for("entries"))
        return render_template(
            "entry_form.html",
            entry=entry,
            form=entry.to_form(),
            statuses=STATUSES,
        )

    @app.route("/entries/save", methods=["POST"])
    def save_entry():
        if g.user is None:
            return redirect(url_for("login"))

        entry_id_raw = request.form.get("entry_id", "").strip()
        existing = None
        if entry_id_raw:
            try:
                existing = fetch_entry(int(entry_id_raw), g.user["id"])
            except ValueError:
                existing = None
            if existing is None:
                flash("Entry not found.", "error")
                return redirect(url_for("entries"))

        error, cleaned = prepare_entry_payload(request.form, existing)
        if error:
            flash(error, "error")
            return render_template(
                "entry_form.html",
                entry=existing,
                form=request.form,
                statuses=STATUSES,
            ), 400

        if existing is None:
            insert_entry(g.user["id"], cleaned)
            flash("Entry added.", "success")
        else:
            update_entry(existing.id, g.user["id"], cleaned)
            flash("Entry updated.", "success")
        return redirect(url_for("entries"))

    @app.route("/entries/<int:entry_id>/status", methods=["POST"])
    def change_entry_status(entry_id: int):
        if g.user is None:
            return redirect(url_for("login"))

        raw_status = request.form.get("status", "")
        if not is_known_status(raw_status):
            flash("Invalid status.", "error")
            return redirect(url_for("entries"))

        cur = g.db.execute(
            "UPDATE entries SET status = ?, updated_at = ? WHERE id = ? AND user_id = ?",
            (normalize_status(raw_status), _now(), entry_id, g.user["id"]),
        )
        g.db.commit()
        if cur.rowcount:
            flash("Status updated.", "success")
        else:
            flash("Entry not found.", "error")
        return redirect(url_for("entries"))

    @app.route("/entries/<int:entry_id>/delete", methods=["POST"])
    def delete_entry(entry_id: int):
        if g.user is None:
            return redirect(url_for("login"))

        delete_entry_row(entry_id, g.user["id"])
        flash("Entry deleted.", "success")
        return redirect(url_for("entries"))

    @app.route("/reports")
    def reports():
        if g.user is None:
            return redirect(url_for("login"))

        period = period_for_user(g.user)
        report = build_report(fetch_entries(g.user["id"]), period, today())
        return render_template("reports.html", period=period, report=report)

    @app.route("/reports/export.csv")
    def export_reports():
        if g.user is None:
            return redirect(url_for("login"))

        rows = fetch_entries(g.user["id"])
        if not rows:
            flash("No reports found to export", "error")
            return redirect(url_for("reports"))

        name = (g.user["full_name"] or "intern").replace(" ", "-")
        filename = f"intern-reports-{name}-{today().isoformat()}.csv"
        app.logger.info("Exporting %d entries for user %s", len(rows), g.user["id"])
        return Response(
            export_entries_csv(rows),
            mimetype="text/csv",
            headers={"Content-Disposition": f"attachment; filename={filename}"},
        )

    @app.route("/settings", methods=["GET", "POST"])
    def settings():
        if g.user is None:
            return redirect(url_for("login"))

        if request.method == "POST":
            error, cleaned = prepare_profile_payload(request.form)
            if error:
                flash(error, "error")
            else:
                g.db.execute(
                    """
                    UPDATE users
                    SET full_name = ?, company_name = ?, start_date = ?, end_date = ?, updated_at = ?
                    WHERE id = ?
                    """,
                    (
                        cleaned["full_name"],
                        cleaned["company_name"],
                        cleaned["start_date"],
                        cleaned["end_date"],
                        _now(),
                        g.user["id"],
                    ),
                )
                g.db.commit()
                flash("Settings saved.", "success")
                return redirect(url_for("settings"))

        return render_template("settings.html", user=g.user)

    @app.route("/api/entries", methods=["GET"])
    def api_entries():
        if g.user is None:
            return jsonify({"error": "Not authenticated"}), 401

        start = request.args.get("start")
        end = request.args.get("end")
        try:
            start_date = datetime.strptime(start, "%Y-%m-%d").date() if start else None
            end_date = datetime.strptime(end, "%Y-%m-%d").date() if end else None
        except ValueError:
            return jsonify({"error": "Invalid date range"}), 400

        rows = fetch_entries(g.user["id"], start_date, end_date)
        rows = filter_entries(rows, request.args.get("q", ""))
        return jsonify([asdict(entry) for entry in rows])

    @app.route("/api/entries", methods=["POST"])
    def api_create_entry():
        if g.user is None:
            return jsonify({"error": "Not authenticated"}), 401

        data = request.get_json(silent=True) or {}
        if not isinstance(data, dict):
            return jsonify({"error": "Invalid payload."}), 400
        error, cleaned = prepare_entry_payload(data)
        if error:
            return jsonify({"error": error}), 400

        entry_id = insert_entry(g.user["id"], cleaned)
        entry = fetch_entry(entry_id, g.user["id"])
        return jsonify(asdict(entry)), 201

    @app.route("/api/entries/<int:entry_id>", methods=["GET"])
    def api_get_entry(entry_id: int):
        if g.user is None:
            return jsonify({"error": "Not authenticated"}), 401

        entry = fetch_entry(entry_id, g.user["id"])
        if entry is None:
            return jsonify({"error": "Entry not found"}), 404
        return jsonify(asdict(entry))

    @app.route("/api/entries/<int:entry_id>", methods=["PUT"])
    def api_update_entry(entry_id: int):
        if g.user is None:
            return jsonify({"error": "Not authenticated"}), 401

        existing = fetch_entry(entry_id, g.user["id"])
        if existing is None:
            return jsonify({"error": "Entry not found"}), 404

        data = request.get_json(silent=True) or {}
        if not isinstance(data, dict):
            return jsonify({"error": "Invalid payload."}), 400
        error, cleaned = prepare_entry_payload(data, existing)
        if error:
            return jsonify({"error": error}), 400

        update_entry(entry_id, g.user["id"], cleaned)
        return jsonify(asdict(fetch_entry(entry_id, g.user["id"])))

    @app.route("/api/entries/<int:entry_id>", methods=["DELETE"])
    def api_delete_entry(entry_id: int):
        if g.user is None:
            return jsonify({"error": "Not authenticated"}), 401

        if not delete_entry_row(entry_id, g.user["id"]):
            return jsonify({"error": "Entry not found"}), 404
        return jsonify({"status": "ok"})

    @app.route("/api/reports", methods=["GET"])
    def api_reports():
        if g.user is None:
            return jsonify({"error": "Not authenticated"}), 401

        period = period_for_user(g.user)
        report = build_report(fetch_entries(g.user["id"]), period, today())
        return jsonify(
            {
                "period": {"start": period.start.isoformat(), "end": period.end.isoformat()},
                "summary": report["summary"].to_dict(),
                "weekly": [bucket.to_dict() for bucket in report["weekly"]],
                "monthly": [bucket.to_dict() for bucket in report["monthly"]],
                "tags": [{"name": name, "count": count} for name, count in report["tags"]],
                "tools": [{"name": name, "count": count} for name, count in report["tools"]],
            }
        )


@dataclass
class EntryDTO:
    id: int
    entry_date: str
    summary: str
    achievements: str
    challenges: str
    remarks: str
    status: str
    skills_tools: str
    tags: str
    duration_minutes: int
    created_at: str
    updated_at: str

    @classmethod
    def from_row(cls, row: sqlite3.Row) -> "EntryDTO":
        return cls(
            id=row["id"],
            entry_date=row["entry_date"],
            summary=row["summary"],
            achievements=row["achievements"] or "",
            challenges=row["challenges"] or "",
            remarks=row["remarks"] or "",
            status=normalize_status(row["status"]),
            skills_tools=row["skills_tools"] or "",
            tags=row["tags"] or "",
            duration_minutes=row["duration_minutes"] or 0,
            created_at=row["created_at"],
            updated_at=row["updated_at"],
        )

    def to_record(self) -> ActivityRecord:
        return ActivityRecord.from_mapping(asdict(self))

    def to_form(self) -> Dict[str, object]:
        hours, minutes = split_minutes(self.duration_minutes)
        form = asdict(self)
        form.update(hours=hours, minutes=minutes)
        return form


def user_exists(email: str) -> bool:
    row = g.db.execute("SELECT 1 FROM users WHERE email = ?", (email,)).fetchone()
    return row is not None


def fetch_entry(entry_id: int, user_id: int) -> Optional[EntryDTO]:
    row = g.db.execute(
        "SELECT * FROM entries WHERE id = ? AND user_id = ?",
        (entry_id, user_id),
    ).fetchone()
    if row is None:
        return None
    return EntryDTO.from_row(row)


def fetch_entries(
    user_id: int, start: Optional[date] = None, end: Optional[date] = None
) -> List[EntryDTO]:
    sql = "SELECT * FROM entries WHERE user_id = ?"
    params: List[object] = [user_id]
    if start is not None:
        sql += " AND entry_date >= ?"
        params.append(start.isoformat())
    if end is not None:
        sql += " AND entry_date <= ?"
        params.append(end.isoformat())
    sql += " ORDER BY entry_date DESC, id DESC"
    rows = g.db.execute(sql, params).fetchall()
    return [EntryDTO.from_row(row) for row in rows]


def insert_entry(user_id: int, cleaned: Mapping[str, object]) -> int:
    now = _now()
    cur = g.db.execute(
        """
        INSERT INTO entries
        (user_id, entry_date, summary, achievements, challenges, remarks, status,
         skills_tools, tags, duration_minutes, created_at, updated_at)
        VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
        """,
        (
            user_id,
            cleaned["entry_date"].isoformat(),
            cleaned["summary"],
            cleaned["achievements"],
            cleaned["challenges"],
            cleaned["remarks"],
            cleaned["status"],
            cleaned["skills_tools"],
            cleaned["tags"],
            cleaned["duration_minutes"],
            now,
            now,
        ),
    )
    g.db.commit()
    current_app.logger.info("Created entry %s for user %s", cur.lastrowid, user_id)
    return cur.lastrowid


def update_entry(entry_id: int, user_id: int, cleaned: Mapping[str, object]) -> None:
    g.db.execute(
        """
        UPDATE entries
        SET entry_date = ?, summary = ?, achievements = ?, challenges = ?, remarks = ?,
            status = ?, skills_tools = ?, tags = ?, duration_minutes = ?, updated_at = ?
        WHERE id = ? AND user_id = ?
        """,
        (
            cleaned["entry_date"].isoformat(),
            cleaned["summary"],
            cleaned["achievements"],
            cleaned["challenges"],
            cleaned["remarks"],
            cleaned["status"],
            cleaned["skills_tools"],
            cleaned["tags"],
            cleaned["duration_minutes"],
            _now(),
            entry_id,
            user_id,
        ),
    )
    g.db.commit()


def delete_entry_row(entry_id: int, user_id: int) -> bool:
    cur = g.db.execute(
        "DELETE FROM entries WHERE id = ? AND user_id = ?",
        (entry_id, user_id),
    )
    g.db.commit()
    return cur.rowcount > 0


def filter_entries(entries: List[EntryDTO], query: str) -> List[EntryDTO]:
    needle = (query or "").strip().lower()
    if not needle:
        return list(entries)
    return [
        entry
        for entry in entries
        if any(needle in getattr(entry, name).lower() for name in SEARCH_FIELDS)
    ]


def blank_entry_form(day: date) -> Dict[str, object]:
    return {
        "entry_date": day.isoformat(),
        "summary": "",
        "achievements": "",
        "challenges": "",
        "remarks": "",
        "status": STATUS_PENDING,
        "skills_tools": "",
        "tags": "",
        "hours": 0,
        "minutes": 0,
    }


def _parse_count(value: object) -> int:
    if value is None or (isinstance(value, str) and value.strip() == ""):
        return 0
    if isinstance(value, bool):
        raise ValueError("boolean is not a count")
    number = int(str(value).strip())
    if number < 0:
        raise ValueError("negative count")
    return number


def prepare_entry_payload(
    payload: Mapping[str, object], existing: Optional[EntryDTO] = None
) -> Tuple[Optional[str], Optional[Dict[str, object]]]:
    def _value(key: str, default: Optional[object] = None) -> Optional[object]:
        value = payload.get(key)
        if value is None or (isinstance(value, str) and value.strip() == ""):
            return default
        return value.strip() if isinstance(value, str) else value

    def _text(key: str) -> str:
        if key not in payload:
            return getattr(existing, key) if existing else ""
        value = payload.get(key)
        return "" if value is None else str(value).strip()

    summary = str(_value("summary", existing.summary if existing else "")).strip()
    if not summary:
        return "Entry title required.", None

    entry_date_raw = _value("entry_date", existing.entry_date if existing else None)
    if entry_date_raw is None:
        return "Missing required fields.", None
    try:
        entry_date = datetime.strptime(str(entry_date_raw), "%Y-%m-%d").date()
    except ValueError:
        return "Invalid date.", None

    raw_status = _value("status", existing.status if existing else STATUS_PENDING)
    if not is_known_status(raw_status):
        return "Invalid status.", None

    try:
        if "duration_minutes" in payload:
            duration_minutes = _parse_count(payload.get("duration_minutes"))
        elif "hours" in payload or "minutes" in payload or existing is None:
            duration_minutes = _parse_count(payload.get("hours")) * 60 + _parse_count(
                payload.get("minutes")
            )
        else:
            duration_minutes = existing.duration_minutes
    except (TypeError, ValueError):
        return "Time spent must be a non-negative whole number.", None

    cleaned = {
        "entry_date": entry_date,
        "summary": summary,
        "achievements": _text("achievements"),
        "challenges": _text("challenges"),
        "remarks": _text("remarks"),
        "status": normalize_status(raw_status),
        "skills_tools": _text("skills_tools"),
        "tags": _text("tags"),
        "duration_minutes": duration_minutes,
    }
    return None, cleaned


def prepare_profile_payload(
    payload: Mapping[str, object]
) -> Tuple[Optional[str], Optional[Dict[str, object]]]:
    full_name = str(payload.get("full_name", "")).strip()
    company_name = str(payload.get("company_name", "")).strip()
    if not full_name:
        return "Name is required.", None

    dates: Dict[str, Optional[date]] = {}
    for key in ("start_date", "end_date"):
        raw = str(payload.get(key, "") or "").strip()
        if not raw:
            dates[key] = None
            continue
        try:
            dates[key] = datetime.strptime(raw, "%Y-%m-%d").date()
        except ValueError:
            return "Invalid date.", None

    if dates["start_date"] and dates["end_date"] and dates["start_date"] > dates["end_date"]:
        return "Start date must be on or before end date.", None

    cleaned = {
        "full_name": full_name,
        "company_name": company_name,
        "start_date": dates["start_date"].isoformat() if dates["start_date"] else None,
        "end_date": dates["end_date"].isoformat() if dates["end_date"] else None,
    }
    return None, cleaned


def period_for_user(user: Mapping[str, object]) -> PeriodRange:
    current = today()
    start = parse_record_date(user["start_date"]) or current
    end = parse_record_date(user["end_date"]) or current
    return PeriodRange(start=start, end=end)


def build_report(entries: List[EntryDTO], period: PeriodRange, as_of: date) -> Dict[str, object]:
    records = [entry.to_record() for entry in entries]
    config = current_app.config
    return {
        "summary": summarize(records),
        "weekly": bucket_by_week(records, period, as_of),
        "monthly": bucket_by_month(records, period, as_of),
        "tags": top_labels(tally_tags(records), config["TOP_TAG_COUNT"]),
        "tools": top_labels(tally_tools(records), config["TOP_TOOL_COUNT"]),
    }


def export_entries_csv(entries: List[EntryDTO]) -> str:
    buffer = io.StringIO()
    writer = csv.writer(buffer)
    writer.writerow(EXPORT_COLUMNS)
    for entry in entries:
        writer.writerow(
            [
                entry.entry_date,
                status_label(entry.status),
                f"{entry.duration_minutes / 60:.2f}",
                entry.summary,
                entry.challenges,
                entry.remarks,
                entry.achievements,
                entry.skills_tools,
                entry.tags,
                entry.created_at,
                entry.updated_at,
            ]
        )
    return buffer.getvalue()


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    application = create_app()
    application.run(debug=True, host="0.0.0.0", port=5001)
