from object_store_discovery.cli import app

if __name__ == "__main__":
    app()
