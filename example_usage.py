# example_usage.py

from dapr_http import DaprClient, DaprException, LoggingConfig, load_from_env


def main():
    # Конфиг из DAPR_* переменных окружения (логирование если DAPR_LOG_ENABLE=true)
    config = load_from_env()
    client = DaprClient(config=config)

    with client:
        # Ничего не отправлено: save/get/delete только подготовлены
        save = client.save_state("statestore", "order-41", {"item": "book", "qty": 2})
        get = client.get_state("statestore", "order-41", dict)
        delete = client.delete_state("statestore", "order-41")

        print("\n=== Save, then read ===")
        save.result()
        print(f"State: {get.result()}")

        print("\n=== Delete ===")
        delete.result()

        print("\n=== Read after delete (new handle) ===")
        print(f"State: {client.get_state('statestore', 'order-41').result()}")

        print("\n=== Service invocation ===")
        try:
            reply = client.invoke_method("checkout", "orders", data={"orderId": 41})
            print(f"Reply: {reply.result()}")
        except DaprException as e:
            print(f"Dapr error: {e.error_code} ({e.status_code}): {e.message}")

    print("\n=== Verbose client ===")
    with DaprClient(port=config.http_port, logging=LoggingConfig(level="DEBUG")) as verbose:
        print(verbose.http.health_check())


if __name__ == "__main__":
    main()
