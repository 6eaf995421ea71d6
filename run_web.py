#!/usr/bin/env python
"""
Start the AgriInfo FastAPI backend.
"""

import argparse
import logging
import os

import uvicorn

logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


def main():
    parser = argparse.ArgumentParser(
        description="Start the AgriInfo API server",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    python run_web.py                    # default settings
    python run_web.py --port 8080        # listen on port 8080
    python run_web.py --reload           # auto reload during development
        """
    )

    parser.add_argument(
        '--host',
        type=str,
        default='0.0.0.0',
        help='Bind address (default: 0.0.0.0)'
    )

    parser.add_argument(
        '--port',
        type=int,
        default=int(os.getenv('FASTAPI_PORT', '8000')),
        help='Port (default: FASTAPI_PORT or 8000)'
    )

    parser.add_argument(
        '--reload',
        action='store_true',
        help='Enable auto reload (development mode)'
    )

    parser.add_argument(
        '--workers',
        type=int,
        default=1,
        help='Worker processes (default: 1)'
    )

    args = parser.parse_args()

    display_host = args.host if args.host != '0.0.0.0' else 'localhost'
    logger.info(f"Starting AgriInfo API: http://{display_host}:{args.port}")
    logger.info(f"Auto reload: {args.reload}")
    logger.info(f"Workers: {args.workers}")
    logger.info(f"API docs: http://{display_host}:{args.port}/docs")

    uvicorn.run(
        "agriinfo.api.server:app",
        host=args.host,
        port=args.port,
        reload=args.reload,
        workers=args.workers if not args.reload else 1,
        log_level="info"
    )


if __name__ == '__main__':
    main()
