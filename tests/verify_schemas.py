
import sys
import os
import traceback

# Add project root to path
sys.path.append(os.getcwd())

print("Starting schema verification...")

try:
    from app import schemas
    print("Schemas package imported successfully.")

    # Try instantiating a few to check for runtime errors in definitions
    from pydantic import ValidationError

    try:
        booking = schemas.ReservationCreate(time_slots=[2, 3], people_num=4, date="2026-01-17")
        print(f"ReservationCreate schema valid: {booking}")
    except ValidationError as e:
        print(f"ReservationCreate validation failed: {e}")

    # the slot count is checked by the reservation service, not the schema
    empty = schemas.ReservationCreate(time_slots=[], people_num=2, date="2026-01-17")
    print(f"ReservationCreate passes empty slot lists through: {empty}")

    try:
        schemas.ReservationCreate(time_slots=[1], people_num=0, date="2026-01-17")
        print("ReservationCreate accepted an empty party (unexpected).")
    except ValidationError:
        print("ReservationCreate rejects empty parties.")

    envelope = schemas.DefaultResponse[schemas.ReservationCreated](data=None)
    print(f"DefaultResponse envelope: {envelope.model_dump()}")

    print("SUCCESS: Schemas verified.")

except Exception:
    print("FAILURE: Schema verification failed.")
    traceback.print_exc()
    sys.exit(1)
