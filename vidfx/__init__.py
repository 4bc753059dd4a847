import logging

# Configure logging for the vidfx package
logging.basicConfig(
    level=logging.INFO,
    format="%(levelname)s:     %(name)s - %(message)s",
)

logging.getLogger("vidfx").setLevel(logging.INFO)
