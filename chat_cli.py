"""
Terminal chat client.
Run from project root: python chat_cli.py [base_url]
The API server (run.py) must be running.
"""
import getpass
import sys

from app.client import ChatApiClient, ChatApiError, Composer, ThreadView
from app.client.api_client import DEFAULT_BASE_URL


def _authenticate(client: ChatApiClient) -> dict:
    while True:
        choice = input("1 = Login, 2 = Register: ").strip() or "1"
        username = input("Username: ").strip()
        password = getpass.getpass("Password: ")
        try:
            if choice == "2":
                client.register(username, password)
            return client.login(username, password)["user"]
        except ChatApiError as e:
            print(f"Error: {e.message}\n")


def main():
    base_url = sys.argv[1] if len(sys.argv) > 1 else DEFAULT_BASE_URL
    client = ChatApiClient(base_url)
    user = client.current_user() or _authenticate(client)
    print(f"Logged in as {user['username']}. Type your messages (empty line to exit, /new for a new chat).\n")

    view = ThreadView(client, thread_id=0, on_thread_created=lambda tid: print(f"[thread {tid}]"))
    composer = Composer(view.submit)
    while True:
        line = input("You: ")
        if not line.strip():
            break
        if line.strip() == "/new":
            view.start_new()
            continue
        composer.set_text(line)
        try:
            result = composer.submit()
        except ChatApiError as e:
            # Text is kept in the composer; the next line replaces it
            print(f"Error: {e.message}\n")
            continue
        if result:
            print(f"\nAssistant: {view.render()[-1].text}\n")
    client.logout()
    print("Bye.")


if __name__ == "__main__":
    main()
