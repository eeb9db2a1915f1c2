"""
Basic DaprHttp usage.

Requires a running sidecar: dapr run --app-id demo --dapr-http-port 3500
"""

from dapr_http import DaprHttp, DaprException, DefaultObjectSerializer

serializer = DefaultObjectSerializer()


def save_and_read():
    """POST a state entry, then GET it back."""
    print("\n=== Save and read ===")

    with DaprHttp(3500) as dapr:
        body = serializer.serialize([{"key": "order", "value": {"orderId": 41}}])
        dapr.invoke_api("POST", "v1.0/state/statestore", content=body).result()

        response = dapr.invoke_api("GET", "v1.0/state/statestore/order").result()
        print(f"Status: {response.status_code}")
        print(f"Body: {response.json()}")


def deferred_handles():
    """Handles fire when consumed, not when created."""
    print("\n=== Deferred handles ===")

    with DaprHttp(3500) as dapr:
        pending_get = dapr.invoke_api("GET", "v1.0/state/statestore/order")
        delete = dapr.invoke_api("DELETE", "v1.0/state/statestore/order")

        delete.result()          # DELETE is sent first
        response = pending_get.result()   # GET runs now and sees the deleted key
        print(f"Status after delete: {response.status_code}, body: {response.body!r}")


def error_handling():
    """Non-2xx responses surface as DaprException."""
    print("\n=== Error handling ===")

    with DaprHttp(3500) as dapr:
        try:
            dapr.invoke_api("GET", "v1.0/state/missing-store/key").result()
        except DaprException as e:
            print(f"{e.error_code} (HTTP {e.status_code}): {e.message}")


if __name__ == "__main__":
    save_and_read()
    deferred_handles()
    error_handling()
