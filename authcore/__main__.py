# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from authcore.app import create_app
from authcore.shared.config import load_config


def main() -> None:
    config = load_config()
    app = create_app(config)
    app.run(host=config.host, port=config.port, debug=not config.is_production())


if __name__ == "__main__":
    main()
