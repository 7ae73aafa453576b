from enum import Enum


class Keywords(Enum):
    PUBLIC_READ = "public-read"
    ZIP_SUFFIX = ".zip"
    MANIFEST_FILENAME = "fastboot-deploy-info.json"
