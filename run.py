"""Quick start script for running the application"""
import uvicorn
import sys
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent
sys.path.insert(0, str(project_root))


def main():
    """Run the FastAPI application"""
    print("=" * 60)
    print("Panel User API")
    print("=" * 60)
    print("\nStarting server...")
    print("API will be available at: http://localhost:8000/api/users")
    print("Interactive docs at: http://localhost:8000/docs")
    print("\nPress CTRL+C to stop\n")

    uvicorn.run(
        "panel_api.main:app",
        host="0.0.0.0",
        port=8000,
        reload=True,
        log_level="info"
    )


if __name__ == "__main__":
    main()
