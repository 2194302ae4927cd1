import logging

from flask import Flask, Response

from .exceptions import BlogFeedError
from .feed import FEED_CONTENT_TYPE, generate_feed


def create_app(config) -> Flask:
    """Serve the feed at /rss.xml, rebuilt from the posts on every request."""
    app = Flask(__name__)
    app.config["SITE"] = config

    @app.route("/rss.xml")
    def rss():
        try:
            body = generate_feed(app.config["SITE"])
        except BlogFeedError as e:
            logging.error(f"Feed generation failed: {e}")
            return Response(f"Feed generation failed: {e}\n", status=500, mimetype="text/plain")
        return Response(body, content_type=FEED_CONTENT_TYPE)

    return app
