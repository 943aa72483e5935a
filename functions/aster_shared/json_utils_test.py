# Copyright 2025 Google LLC
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.
# ==============================================================================



import unittest

from aster_shared.json_utils import (
    camel_to_snake,
    convert_keys,
    snake_to_camel,
    to_plain_json,
)
from aster_shared.types import InquiryStatus


class JsonUtilsTest(unittest.TestCase):

    def test_name_conversion(self):
        self.assertEqual(camel_to_snake("backgroundImage"), "background_image")
        self.assertEqual(camel_to_snake("section1"), "section1")
        self.assertEqual(snake_to_camel("service_interested"), "serviceInterested")
        self.assertEqual(snake_to_camel("id"), "id")

    def test_convert_keys_is_recursive_and_leaves_values(self):
        data = {
            "servicesPage": {"section1": {"title": "keepThisValue"}},
            "signatureStyles": [{"iconName": "Heart"}],
        }
        converted = convert_keys(data, "camel_to_snake")
        self.assertEqual(
            converted,
            {
                "services_page": {"section1": {"title": "keepThisValue"}},
                "signature_styles": [{"icon_name": "Heart"}],
            },
        )
        self.assertEqual(convert_keys(converted, "snake_to_camel"), data)

    def test_unknown_direction(self):
        with self.assertRaises(ValueError):
            convert_keys({}, "kebab")

    def test_to_plain_json(self):
        self.assertEqual(
            to_plain_json({"status": InquiryStatus.NEW, "tags": ("a", "b")}),
            {"status": "new", "tags": ["a", "b"]},
        )


if __name__ == "__main__":
    unittest.main()
