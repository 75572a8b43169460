#!/usr/bin/env python3
"""
httplog - HTTP service with layered request and error logging
Web service start script
"""

from httplog.web.main import run_server


if __name__ == "__main__":
    run_server()
