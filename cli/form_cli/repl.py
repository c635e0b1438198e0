"""REPL for the Form CLI."""

from __future__ import annotations

from collections.abc import Callable

import httpx

from form_cli.client import ApiClient, ApiError
from form_cli.config import Config
from formcore import FormValidationError, derive_age, validate_mobile, validate_name, validate_submission


def _check_dob(value: str) -> str:
    dob, _ = derive_age(value)
    return dob.isoformat()


class Repl:
    """Interactive REPL for entering and managing form records."""

    def __init__(
        self,
        config: Config,
        client: ApiClient | None = None,
        read: Callable[[str], str] = input,
    ):
        self.config = config
        self.client = client or ApiClient(config.api_url)
        self.records: list[dict] = []
        self.running = True
        self._read = read

    def start(self):
        """Start the REPL."""
        print(f"form > Connected to {self.config.api_url}. Type /help for commands.")

        while self.running:
            try:
                line = self._read("form > ").strip()

                if not line:
                    continue

                if line.startswith("/"):
                    self._handle_command(line)
                else:
                    print("Type /help for available commands.")

            except (EOFError, KeyboardInterrupt):
                print()
                break

        self.client.close()

    def _handle_command(self, line: str):
        """Handle REPL commands."""
        parts = line.split(maxsplit=1)
        cmd = parts[0].lower()
        arg = parts[1] if len(parts) > 1 else None

        if cmd == "/quit":
            self.running = False
            print("Goodbye.")
        elif cmd == "/new":
            self._new_record()
        elif cmd == "/list":
            self._list_records()
        elif cmd == "/edit":
            if arg:
                self._edit_record(arg)
            else:
                print("Usage: /edit <number>")
        elif cmd == "/delete":
            if arg:
                self._delete_record(arg)
            else:
                print("Usage: /delete <number>")
        elif cmd == "/health":
            self._show_health()
        elif cmd == "/help":
            self._show_help()
        else:
            print(f"Unknown command: {cmd}")
            print("Type /help for available commands.")

    def _prompt(self, label: str, check: Callable[[str], str], default: str | None = None) -> str:
        """Ask for a field until it passes its check. Enter keeps the default."""
        hint = f" [{default}]" if default else ""
        while True:
            raw = self._read(f"  {label}{hint}: ").strip()
            if not raw and default:
                raw = default
            if not raw:
                print(f"  {label} is required.")
                continue
            try:
                return check(raw)
            except FormValidationError as e:
                print(f"  {e.message}")

    def _submit(self, form: dict) -> dict | None:
        """Validate locally, then send. Returns the success body or None."""
        try:
            validate_submission(form)
        except FormValidationError as e:
            print(f"  {e.message}")
            return None

        try:
            result = self.client.submit(form)
        except ApiError as e:
            print(f"  Error ({e.status_code}): {e}")
            if isinstance(e.body, dict) and e.body.get("error"):
                print(f"  Cause: {e.body['error']}")
            return None
        except httpx.HTTPError as e:
            print(f"  Could not reach {self.config.api_url}: {e}")
            return None

        processed = result.get("processedData", {})
        downstream = result.get("downstreamResponse", {})
        print(f"  \033[32m{downstream.get('message', 'Done')}\033[0m ({result.get('httpMethod')})")
        print(f"  {processed.get('name')}  {processed.get('mobile')}  age {processed.get('age')}")
        return result

    def _new_record(self):
        """Enter a new record."""
        name = self._prompt("Name", validate_name)
        mobile = self._prompt("Mobile", validate_mobile)
        dob = self._prompt("Date of birth (YYYY-MM-DD)", _check_dob)
        self._submit({"name": name, "mobile": mobile, "dob": dob, "action": "create"})

    def _list_records(self):
        """Show all records."""
        try:
            self.records = self.client.get_data()
        except (ApiError, httpx.HTTPError) as e:
            print(f"Failed to list records: {e}")
            return

        if not self.records:
            print("  No records yet. Use /new to add one.")
            return

        print(f"  Records ({len(self.records)}):")
        for i, rec in enumerate(self.records, 1):
            print(f"  {i}. {rec.get('name')}  {rec.get('mobile')}  {rec.get('dob')}  age {rec.get('age')}")

    def _record_at(self, index: str) -> dict | None:
        """Look up a record by its /list number."""
        try:
            idx = int(index) - 1
        except ValueError:
            print("  Invalid number.")
            return None

        if not self.records:
            try:
                self.records = self.client.get_data()
            except (ApiError, httpx.HTTPError) as e:
                print(f"Failed to load records: {e}")
                return None

        if 0 <= idx < len(self.records):
            return self.records[idx]
        print("  Invalid index. Use /list to see records.")
        return None

    def _edit_record(self, index: str):
        """Update a record. Its mobile is the key and cannot change."""
        rec = self._record_at(index)
        if rec is None:
            return

        print(f"  Editing {rec['name']} ({rec['mobile']}). Press Enter to keep a value.")
        name = self._prompt("Name", validate_name, default=rec["name"])
        dob = self._prompt("Date of birth (YYYY-MM-DD)", _check_dob, default=rec["dob"])
        if self._submit({"name": name, "mobile": rec["mobile"], "dob": dob, "action": "update"}):
            self._list_records()

    def _delete_record(self, index: str):
        """Delete a record after confirmation."""
        rec = self._record_at(index)
        if rec is None:
            return

        answer = self._read(f"  Delete {rec['name']} ({rec['mobile']})? [y/N] ").strip().lower()
        if answer not in ("y", "yes"):
            print("  Cancelled.")
            return

        form = {"name": rec["name"], "mobile": rec["mobile"], "dob": rec["dob"], "action": "delete"}
        if self._submit(form):
            self._list_records()

    def _show_health(self):
        """Show dispatch API and receiver status."""
        try:
            report = self.client.health()
        except (ApiError, httpx.HTTPError) as e:
            print(f"  Dispatch API unreachable at {self.config.api_url}: {e}")
            return

        receiver = report.get("receiver", {})
        print(f"  {report.get('service')}: {report.get('status')}")
        print(f"  Receiver {receiver.get('url')}: {receiver.get('status')}")

    def _show_help(self):
        """Show help message."""
        print("""
  REPL Commands:
    /new           - Enter a new record
    /list          - Show all records
    /edit <n>      - Update record number <n>
    /delete <n>    - Delete record number <n> (asks first)
    /health        - Check the dispatch API and receiver
    /help          - Show this help
    /quit          - Exit REPL
""")
