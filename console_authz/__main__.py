# Copyright 2025 The OpenChoreo Authors
# SPDX-License-Identifier: Apache-2.0

import uvicorn

from console_authz.config import settings


def main():
    # Logging is configured by console_authz.main; keep uvicorn from replacing it
    uvicorn.run("console_authz.main:app", host=settings.host, port=settings.port, log_config=None)


if __name__ == "__main__":
    main()
