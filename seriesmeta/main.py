# Copyright (c) MONAI Consortium
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#     http://www.apache.org/licenses/LICENSE-2.0
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

import argparse
import json
import logging
import sys

from seriesmeta import print_config
from seriesmeta.config import settings
from seriesmeta.datastore.dicom import create_dicomweb_client
from seriesmeta.interfaces.exception import RetrievalFailure
from seriesmeta.pipeline import ImageIdPipeline

logger = logging.getLogger(__name__)


class Main:
    def __init__(self, loglevel=logging.INFO, actions=("image_ids",)):
        self.actions = set([actions] if isinstance(actions, str) else actions)
        logging.basicConfig(
            level=loglevel,
            format="[%(asctime)s] [%(process)s] [%(threadName)s] [%(levelname)s] (%(name)s:%(lineno)d) - %(message)s",
        )

    def args_image_ids(self, parser):
        parser.add_argument("-u", "--url", help="DICOMweb server url", default=settings.SERIESMETA_DICOMWEB_URL)
        parser.add_argument("--study", required=True, help="StudyInstanceUID")
        parser.add_argument("--series", required=True, help="SeriesInstanceUID")
        parser.add_argument("--instance", default=None, help="SOPInstanceUID (only this instance)")
        parser.add_argument("--wado-root", default=None, help="WADO-RS root used in image ids (default: url)")
        parser.add_argument("--username", default=None, help="DICOMweb username")
        parser.add_argument("--password", default=None, help="DICOMweb password")
        parser.add_argument("--qido-prefix", default=None, help="QIDO-RS url prefix")
        parser.add_argument("--wado-prefix", default=None, help="WADO-RS url prefix")
        parser.add_argument("-w", "--workers", type=int, default=settings.SERIESMETA_WORKERS, help="Worker threads")
        parser.add_argument("--no-suv", action="store_true", help="Skip SUV scaling for PET series")
        parser.add_argument("-j", "--json", action="store_true", help="Print calibration and scaling as JSON")
        parser.add_argument(
            "-l",
            "--log-level",
            default="INFO",
            type=str,
            choices=["DEBUG", "INFO", "WARNING", "ERROR"],
            help="Log level",
        )

    def args_parser(self, name="seriesmeta"):
        parser = argparse.ArgumentParser(name)
        parser.add_argument("-v", "--version", action="store_true", help="print version")

        subparsers = parser.add_subparsers(help="sub-command help")
        if "image_ids" in self.actions:
            parser_a = subparsers.add_parser("image_ids", help="List per-frame image ids of a series")
            self.args_image_ids(parser_a)
            parser_a.set_defaults(action="image_ids")

        return parser

    def run(self, argv=None):
        parser = self.args_parser()
        args = parser.parse_args(argv)

        if args.version:
            print_config()
            return 0

        if not hasattr(args, "action"):
            parser.print_usage()
            return -1

        return self.action_image_ids(args)

    def action_image_ids(self, args, client=None, out=sys.stdout):
        logging.getLogger().setLevel(args.log_level)

        if client is None:
            if not args.url:
                print("DICOMweb url NOT provided (--url or SERIESMETA_DICOMWEB_URL)", file=sys.stderr)
                return 1
            client = create_dicomweb_client(
                args.url,
                username=args.username,
                password=args.password,
                qido_prefix=args.qido_prefix,
                wado_prefix=args.wado_prefix,
            )

        pipeline = ImageIdPipeline(
            wado_rs_root=args.wado_root if args.wado_root else args.url,
            client=client,
            max_workers=args.workers,
            suv_enabled=not args.no_suv,
        )

        try:
            result = pipeline.run(args.study, args.series, args.instance)
        except RetrievalFailure as e:
            logger.error(e.msg)
            return 2

        if args.json:
            print(json.dumps(result.to_json(), indent=2), file=out)
        else:
            for image_id in result.image_ids:
                print(image_id, file=out)
        return 0


def main():
    sys.exit(Main().run())


if __name__ == "__main__":
    main()
