# Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
# SPDX-License-Identifier: Apache-2.0

import sys

from gemmkit.cli import main

if __name__ == "__main__":
    sys.exit(main())
