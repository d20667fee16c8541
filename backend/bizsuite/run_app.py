import os
from pathlib import Path

import uvicorn
from dotenv import load_dotenv


def main():
    """Start the API server; HOST, PORT and RELOAD may come from the environment or .env."""
    # Project root .env (backend/bizsuite -> root)
    env_path = Path(__file__).resolve().parent.parent.parent / ".env"
    if env_path.exists():
        print(f"Loading environment from {env_path}")
        load_dotenv(env_path)

    host = os.getenv("HOST", "0.0.0.0")
    port = int(os.getenv("PORT", "8001"))
    reload = os.getenv("RELOAD", "false").lower() in ("1", "true", "yes")

    print("Starting Business Suite API...")
    uvicorn.run("bizsuite.main:app", host=host, port=port, log_level="info", reload=reload)


if __name__ == "__main__":
    main()
