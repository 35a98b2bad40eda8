"""Example client usage for the Cabin Availability API"""
import requests

BASE_URL = "http://localhost:8000"


def example_usage():
    """Walk through the read endpoints and an invoice request"""

    # 1. Check health
    print("1. Checking API health...")
    response = requests.get(f"{BASE_URL}/health")
    print(f"   Status: {response.json()}\n")

    # 2. Operators
    print("2. Listing operators...")
    response = requests.get(BASE_URL, params={"resource": "operators"})
    for op in response.json().get("operators", []):
        print(f"   - {op['operator']} ({op['sourceSheet']})")
    print()

    # 3. Availability
    date = input("Enter trip date (YYYY-MM-DD): ").strip()
    print("3. Getting availability...")
    response = requests.get(BASE_URL, params={"resource": "availability", "date": date})
    result = response.json()
    if not result["ok"]:
        print(f"   Failed: {result['error']}")
        return
    print(f"   Total available cabins: {result['total']}")
    for op in result["operators"]:
        print(f"   {op['operator']}: {op['total']}")
        for cabin in op["cabins"]:
            print(f"     - {cabin['name']}: {cabin['available']}")
    print()

    # 4. Search a cabin
    cabin_name = input("Enter cabin name to search: ").strip()
    guests = input("Number of guests (default 1): ").strip() or "1"
    response = requests.get(
        BASE_URL,
        params={"resource": "search", "date": date, "name": cabin_name, "guests": guests},
    )
    search = response.json()
    if search["ok"]:
        print(f"   {len(search['matches'])} operator(s) have '{search['cabin']}' available:")
        for match in search["matches"]:
            print(f"     - {match['operator']}: {match['available']}")
    else:
        print(f"   Failed: {search['error']}")
    print()

    # 5. Create an invoice
    email = input("Payer email (press Enter to skip invoice): ").strip()
    if not email:
        return
    amount = input("Amount (IDR): ").strip()
    response = requests.post(
        f"{BASE_URL}/api/create-invoice",
        json={
            "amount": float(amount),
            "payerEmail": email,
            "description": f"{cabin_name} on {date}",
        },
    )
    invoice = response.json()
    if invoice["ok"]:
        print(f"   Invoice {invoice['id']}: {invoice['invoiceUrl']}")
    else:
        print(f"   Failed: {invoice['error']}")


if __name__ == "__main__":
    try:
        example_usage()
    except KeyboardInterrupt:
        print("\n\nExiting...")
    except Exception as e:
        print(f"\nError: {e}")
