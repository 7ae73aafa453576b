import boto3
import json
import logging
from botocore.exceptions import BotoCoreError, ClientError

# Configure global logger
logger = logging.getLogger(__name__)


class S3Handler:
    def __init__(self, bucket_name, region_name, aws_access_key_id=None,
                 aws_secret_access_key=None, aws_session_token=None,
                 profile=None, endpoint_url=None, s3_client=None):
        self.bucket_name = bucket_name

        if s3_client is not None:
            self.s3 = s3_client
            return

        session = boto3.Session(
            profile_name=profile,
            aws_access_key_id=aws_access_key_id,
            aws_secret_access_key=aws_secret_access_key,
            aws_session_token=aws_session_token,
            region_name=region_name,
        )
        kwargs = {}
        if endpoint_url:
            kwargs["endpoint_url"] = endpoint_url
        self.s3 = session.client("s3", **kwargs)
        logger.info(f"S3Handler initialized for bucket: {self.bucket_name} in region: {region_name}")

    @classmethod
    def from_config(cls, config):
        """Creates a handler from a resolved PluginConfig."""
        return cls(
            bucket_name=config.bucket,
            region_name=config.region,
            aws_access_key_id=config.access_key_id,
            aws_secret_access_key=config.secret_access_key,
            aws_session_token=config.session_token,
            profile=config.profile,
            endpoint_url=config.endpoint_url,
        )

    def list_objects(self, prefix: str):
        """Lists objects under prefix. Only the first page the API returns is used."""
        try:
            logger.info(f"Listing objects in s3://{self.bucket_name}/{prefix}")
            response = self.s3.list_objects(Bucket=self.bucket_name, Prefix=prefix)
            contents = response.get("Contents") or []
            if response.get("IsTruncated"):
                logger.info(f"Listing of {prefix} truncated after {len(contents)} objects")
            return contents

        except (ClientError, BotoCoreError) as e:
            logger.error(f"Failed to list s3://{self.bucket_name}/{prefix}: {e}", exc_info=True)
            raise

    def get_json(self, key: str):
        """Downloads and returns a JSON document from S3."""
        try:
            logger.info(f"Downloading object from s3://{self.bucket_name}/{key}")
            response = self.s3.get_object(Bucket=self.bucket_name, Key=key)
            content = response["Body"].read().decode("utf-8")
            return json.loads(content)

        except ClientError as e:
            if e.response.get("Error", {}).get("Code") == "NoSuchKey":
                logger.info(f"Object not found: s3://{self.bucket_name}/{key}")
            else:
                logger.error(f"AWS ClientError downloading from S3: {e}", exc_info=True)
            raise

    def put_bytes(self, key: str, body: bytes, acl: str = None, content_type: str = None):
        """Uploads raw bytes to the bucket, overwriting any object at key."""
        extra = {}
        if acl:
            extra["ACL"] = acl
        if content_type:
            extra["ContentType"] = content_type

        try:
            logger.info(f"Uploading object to s3://{self.bucket_name}/{key}")
            response = self.s3.put_object(Bucket=self.bucket_name, Key=key, Body=body, **extra)
            status_code = response.get("ResponseMetadata", {}).get("HTTPStatusCode", 0)
            if status_code == 200:
                logger.info(f"Successfully uploaded {key} to {self.bucket_name}")
            else:
                logger.warning(f"Upload returned status code {status_code}")
            return response

        except (ClientError, BotoCoreError) as e:
            logger.error(f"Failed to upload {key} to bucket {self.bucket_name}: {e}", exc_info=True)
            raise

    def copy(self, source_key: str, dest_key: str, acl: str = None):
        """Server-side copy of one object to another key in the same bucket."""
        extra = {}
        if acl:
            extra["ACL"] = acl

        try:
            logger.info(f"Copying s3://{self.bucket_name}/{source_key} to {dest_key}")
            return self.s3.copy_object(
                Bucket=self.bucket_name,
                CopySource={"Bucket": self.bucket_name, "Key": source_key},
                Key=dest_key,
                **extra,
            )

        except (ClientError, BotoCoreError) as e:
            logger.error(f"Failed to copy {source_key} to {dest_key}: {e}", exc_info=True)
            raise
