import os

# Disables terminal detection in fileserve.logger
os.environ["IN_PYTEST"] = "1"
