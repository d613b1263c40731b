import sys

import requests

from app.core.security import create_access_token

BASE_URL = "http://127.0.0.1:8000/api/v1"


def debug_reservation_flow(user_id: str, day: str):
    # 1. Mint a token for an existing user (auth lives in the resident directory)
    token = create_access_token(user_id)
    headers = {"Authorization": f"Bearer {token}"}
    print("Got token.")

    # 2. Free slots for the day
    response = requests.get(f"{BASE_URL}/reservations/free-slots", params={"date": day}, headers=headers)
    print(f"Free slots [{response.status_code}]: {response.text}")
    if response.status_code != 200:
        return

    pairs = response.json()["data"]["free_pairs"]
    free = [s["position"] for s in response.json()["data"]["free_slots"]]
    if not free:
        print("Nothing free on this day.")
        return

    # 3. Book a double session when possible, otherwise the first free slot
    time_slots = list(pairs[0]) if pairs else [free[0]]
    payload = {"time_slots": time_slots, "people_num": 2, "date": day}
    response = requests.post(f"{BASE_URL}/reservations/", json=payload, headers=headers)
    print(f"Create [{response.status_code}]: {response.text}")

    # 4. Same request again should be rejected as busy
    response = requests.post(f"{BASE_URL}/reservations/", json=payload, headers=headers)
    print(f"Repeat [{response.status_code}]: {response.text}")


if __name__ == "__main__":
    if len(sys.argv) != 3:
        print("usage: python debug_reservations.py <user-uuid> <YYYY-MM-DD>")
        sys.exit(1)
    debug_reservation_flow(sys.argv[1], sys.argv[2])
