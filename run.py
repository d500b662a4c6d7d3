from json_server import create_app
from json_server.cli import resource_urls
from json_server.config import DevConfig
from json_server.extensions import STORE_KEY

app = create_app(DevConfig)

if __name__ == "__main__":
    port = app.config["PORT"]
    for url in resource_urls(app.extensions[STORE_KEY].names(), port):
        app.logger.info("Serving %s", url)
    app.run(host=app.config["HOST"], port=port, debug=app.config["DEBUG"])
