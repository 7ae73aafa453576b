from fastboot_s3.plugin import create_deploy_plugin
import json
import argparse
import logging
import sys


def _build_plugin(args):
    options = {
        "bucket": args.bucket,
        "region": args.region,
        "profile": args.profile,
        "prefix": args.prefix,
        "archive_prefix": args.archive_prefix,
        "manifest_filename": args.manifest,
    }
    revision = getattr(args, "revision", None)
    if revision:
        options["revision_key"] = revision
    if getattr(args, "zip", False):
        options["activate_zip"] = True
    if getattr(args, "no_manifest", False):
        options["activate_manifest"] = False
    return create_deploy_plugin({k: v for k, v in options.items() if v is not None})


def _run(args, hook: str, context: dict):
    """Runs setup and then the requested hook, the way the deploy pipeline does."""
    plugin = _build_plugin(args)
    context.update(plugin.setup(context))
    return getattr(plugin, hook)(context)


def list_revisions(args):
    """
    print the revisions stored in the bucket as json
    """
    try:
        result = _run(args, "fetch_revisions", {})
        # str default for datetime
        print(json.dumps(result["revisions"], indent=2, default=str))
    except Exception as e:
        print(f"An error occurred listing revisions: {e}")
        sys.exit(1)


def upload_revision(args):
    try:
        _run(args, "upload", {"archive_path": args.archive})
        print(f"Uploaded {args.archive} as revision {args.revision}")
    except Exception as e:
        print(f"An error occurred uploading revision: {e}")
        sys.exit(1)


def activate_revision(args):
    try:
        result = _run(args, "activate", {})
        for outcome in result.outcomes:
            print(f"{outcome.name}: {outcome.key}")
        print(f"Activated revision {args.revision}")
    except Exception as e:
        print(f"An error occurred activating revision: {e}")
        sys.exit(1)


# run pip install -e .
# then do your thing
def main():
    parser = argparse.ArgumentParser(
        prog='fastboot-s3',
        description='Manage fastboot app-server builds stored in S3: '
        '          list uploaded revisions, upload a new build archive'
        '          and activate a revision.'
    )
    parser.add_argument('--bucket', help='S3 bucket holding the builds')
    parser.add_argument('--region', help='AWS region (default: $AWS_REGION)')
    parser.add_argument('--profile', help='AWS credentials profile')
    parser.add_argument('--prefix', help='Key prefix shared by all objects of the app')
    parser.add_argument('--archive-prefix', help='Key prefix of the build archives, e.g. dist-')
    parser.add_argument('--manifest', help='Manifest file name (default: fastboot-deploy-info.json)')
    parser.add_argument('--verbose', '-v', action='store_true', help='Enable info logging')

    # since we're having different functions, use subparsers for each one
    subparsers = parser.add_subparsers(
        dest='command',
        help='Available commands'
    )

    list_parser = subparsers.add_parser(
        'list',
        help='List uploaded revisions, newest first'
    )
    list_parser.set_defaults(func=list_revisions)

    upload_parser = subparsers.add_parser(
        'upload',
        help='Upload a build archive as a new revision'
    )
    upload_parser.add_argument('--archive', required=True, help='Path to the build zip')
    upload_parser.add_argument('--revision', required=True, help='Revision key to store it under')
    upload_parser.set_defaults(func=upload_revision)

    activate_parser = subparsers.add_parser(
        'activate',
        help='Point the manifest at a revision'
    )
    activate_parser.add_argument('--revision', required=True, help='Revision key to activate')
    activate_parser.add_argument('--zip', action='store_true',
                                 help='Also copy the archive to its stable alias key')
    activate_parser.add_argument('--no-manifest', action='store_true',
                                 help='Do not rewrite the manifest')
    activate_parser.set_defaults(func=activate_revision)

    args = parser.parse_args()

    if args.command is None:
        parser.print_help()
        sys.exit(1)

    logging.basicConfig(
        level=logging.INFO if getattr(args, 'verbose', False) else logging.WARNING,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s"
    )

    # execute the passed function
    args.func(args)


if __name__ == '__main__':
    main()
