"""
Configuration from DAPR_* environment variables or a .env file.

    DAPR_HTTP_PORT=3501
    DAPR_API_TOKEN=secret-token
    DAPR_LOG_ENABLE=true
    DAPR_LOG_FORMAT=json
"""

from dapr_http import DaprClient, load_from_env
from dapr_http.core.env_config import config_summary


def main():
    config = load_from_env()
    print(config_summary(config))

    with DaprClient(config=config) as client:
        print(client.get_state("statestore", "order").result())


if __name__ == "__main__":
    main()
