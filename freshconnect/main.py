# freshconnect/main.py
import uvicorn

from freshconnect.api import create_app

app = create_app()

if __name__ == "__main__":
    uvicorn.run(app, host="0.0.0.0", port=5000)
