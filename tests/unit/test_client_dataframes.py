# Copyright (c) Goodcatch.
# Licensed under the MIT license.

import unittest

import pandas as pd

from fxk.client import FxkClient
from fxk.core.config import FxkConfig
from fxk.core.results import FxkResult
from fxk.utils._pandas import records_to_dataframe


class TestDataFrameOperations(unittest.TestCase):
    """Tests for the list_dataframe helpers."""

    def setUp(self):
        config = FxkConfig(app_id="a", app_secret="s", permanent_code="p", url="https://u/", timeout=1)
        self.client = FxkClient(config)

    def test_departments_dataframe(self):
        self.client.departments.list = lambda: FxkResult(
            error_code=0, data=[{"id": 1, "name": "Sales"}, {"id": 2, "name": "R&D", "parentId": 1}]
        )

        df = self.client.departments.list_dataframe()

        self.assertIsInstance(df, pd.DataFrame)
        self.assertEqual(len(df), 2)
        self.assertListEqual(df["name"].tolist(), ["Sales", "R&D"])
        self.assertTrue(pd.isna(df.iloc[0]["parentId"]))

    def test_users_dataframe_passes_arguments(self):
        calls = []

        def fake_list(department_id, fetch_child=False):
            calls.append((department_id, fetch_child))
            return FxkResult(error_code=0, data=[{"openUserId": "FSUID_1", "mobile": "138"}])

        self.client.users.list = fake_list

        df = self.client.users.list_dataframe(7, True)

        self.assertEqual(calls, [(7, True)])
        self.assertEqual(df.iloc[0]["openUserId"], "FSUID_1")

    def test_error_gives_empty_frame(self):
        self.client.departments.list = lambda: FxkResult(exception=["boom"])

        df = self.client.departments.list_dataframe()

        self.assertTrue(df.empty)


class TestRecordsToDataFrame(unittest.TestCase):
    def test_column_order(self):
        df = records_to_dataframe([{"b": 1, "a": 2, "c": 3}], columns=["a", "b"])
        self.assertListEqual(list(df.columns), ["a", "b", "c"])

    def test_empty_with_columns(self):
        df = records_to_dataframe([], columns=["id", "name"])
        self.assertTrue(df.empty)
        self.assertListEqual(list(df.columns), ["id", "name"])
