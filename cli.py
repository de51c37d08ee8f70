# Role: Local developer CLI to talk to the Langflow flow through ChatGateway without running the web server.
# Useful for checking credentials/flow ids and for seeing debug logs in the terminal.

from __future__ import annotations
import json
import uuid

import gateway.config
gateway.config.load_env()

from gateway.config import ConfigError, load_settings
from gateway.core.chat_gateway import ChatGateway, ChatTurnResult
from gateway.logging_config import setup_logging


def _new_session_id() -> str:
    return str(uuid.uuid4())


def _print_result(result: ChatTurnResult) -> None:
    if result.stream is not None:
        print("\nAssistant (stream): ", end="", flush=True)
        try:
            for chunk in result.stream.chunks:
                print(chunk.decode("utf-8", errors="replace"), end="", flush=True)
        finally:
            result.stream.close()
        print()
        return

    if result.status_code != 200:
        print(f"\n[{result.status_code}] {json.dumps(result.payload)}")
        return

    if isinstance(result.payload, dict) and set(result.payload) <= {"message", "session_id"}:
        print(f"\nAssistant: {result.payload.get('message')}")
    else:
        print(f"\nAssistant (raw):\n{json.dumps(result.payload, indent=2)}")


def main() -> None:
    # 1) Build ChatGateway from env settings
    # 2) Maintain a session id across turns (sent as chatId, so replies are normalized)
    # 3) /raw toggles the full upstream response (no chatId, default session)
    setup_logging()
    try:
        settings = load_settings()
    except ConfigError as e:
        print(f"Config error: {e}")
        raise SystemExit(1)

    print("ZapGap Chat CLI")
    print("Commands: /new (new session), /session (show session id), /raw (toggle full response), /exit")
    print("-" * 50)

    chat = ChatGateway(settings)
    session_id = _new_session_id()
    raw_mode = False
    print(f"session id: {session_id}")

    while True:
        try:
            user_message = input("\nYou: ").strip()
        except (EOFError, KeyboardInterrupt):
            print("\nBye!")
            return

        if not user_message:
            continue

        cmd = user_message.lower()

        if cmd in {"/exit", "exit", "quit", "/quit"}:
            print("Bye!")
            return

        if cmd in {"/new", "new"}:
            session_id = _new_session_id()
            print(f"New session id: {session_id}")
            continue

        if cmd in {"/session", "session"}:
            print(f"session id: {session_id}")
            continue

        if cmd == "/raw":
            raw_mode = not raw_mode
            print(f"raw mode: {'on' if raw_mode else 'off'}")
            continue

        result = chat.handle(user_message, None if raw_mode else session_id)
        _print_result(result)


if __name__ == "__main__":
    main()
