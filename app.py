from site_scheduler.main import create_app

app = create_app()

if __name__ == "__main__":
    app.run(port=4000)
