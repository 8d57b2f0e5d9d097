import os
import tempfile
import unittest
from unittest.mock import MagicMock, patch
from georef_fetcher.config.settings import Settings
from georef_fetcher.core.exceptions import NetworkError
from georef_fetcher.datasets_fetcher import GeorefFetcher, main

BODIES = {
    "municipios": '<html>502 Bad Gateway</html>',
    "departamentos": (
        '{"departamentos":[{"id":"06007","nombre":"Adolfo Alsina",'
        '"provincia":{"nombre":"Buenos Aires"},"centroide":{"lat":-37.2,"lon":-62.9}}]}'
    ),
    "localidades": (
        '{"localidades":[{"id":"0600701001","nombre":"Carhué","categoria":"Localidad simple",'
        '"departamento":{"nombre":"Adolfo Alsina"},"municipio":{"nombre":"Adolfo Alsina"},'
        '"provincia":{"nombre":"Buenos Aires"},"centroide":{"lat":-37.18,"lon":-62.76}}]}'
    ),
}


def fake_fetch(url, timeout=None, dataset=None):
    return BODIES[dataset]


class TestGeorefFetcher(unittest.TestCase):
    def setUp(self):
        self.tmp = tempfile.TemporaryDirectory()
        self.addCleanup(self.tmp.cleanup)
        self.dir = os.path.join(self.tmp.name, "data", "georef")

    @patch('georef_fetcher.core.job.fetch', side_effect=fake_fetch)
    def test_run_creates_dir_and_isolates_failures(self, _):
        results = GeorefFetcher(data_dir=self.dir).run()
        by_name = {r["dataset"]: r for r in results}

        self.assertEqual(set(by_name), set(Settings.DATASETS))
        self.assertEqual(by_name["municipios"]["status"], "failed")
        self.assertEqual(by_name["departamentos"]["status"], "written")
        self.assertEqual(by_name["localidades"]["status"], "written")

        files = sorted(os.listdir(self.dir))
        self.assertEqual(files, [
            "departamentos.csv", "departamentos.json",
            "localidades.csv", "localidades.json",
            "municipios.json",
        ])
        with open(os.path.join(self.dir, "localidades.csv"), encoding="utf-8") as f:
            self.assertEqual(
                f.read().splitlines()[1],
                "0600701001,Carhué,Localidad simple,Adolfo Alsina,Adolfo Alsina,Buenos Aires,-37.18,-62.76"
            )

    @patch('georef_fetcher.core.job.fetch')
    def test_all_jobs_fail(self, mock_fetch):
        mock_fetch.side_effect = NetworkError("sin conexión")
        results = GeorefFetcher(data_dir=self.dir).run()
        self.assertEqual(len(results), 3)
        self.assertTrue(all(r["status"] == "failed" for r in results))

    @patch('georef_fetcher.core.job.FetchTransformJob.execute')
    def test_unexpected_worker_error_is_reported(self, mock_execute):
        mock_execute.side_effect = RuntimeError("error inesperado")
        fetcher = GeorefFetcher(data_dir=self.dir, datasets=["localidades"])
        with self.assertLogs('georef_fetcher.datasets_fetcher', level='ERROR'):
            results = fetcher.run()
        self.assertEqual(results[0]["status"], "failed")
        self.assertEqual(results[0]["error"], "error inesperado")

    @patch('georef_fetcher.core.job.fetch', side_effect=fake_fetch)
    def test_subset_of_datasets(self, mock_fetch):
        results = GeorefFetcher(data_dir=self.dir, max_results=10, datasets=["departamentos"]).run()
        self.assertEqual([r["dataset"] for r in results], ["departamentos"])
        mock_fetch.assert_called_once_with(
            "https://apis.datos.gob.ar/georef/api/departamentos?max=10",
            timeout=None, dataset="departamentos"
        )

    @patch('georef_fetcher.core.job.fetch', side_effect=fake_fetch)
    def test_duplicate_datasets_run_once(self, mock_fetch):
        fetcher = GeorefFetcher(
            data_dir=self.dir, datasets=["localidades", "departamentos", "localidades"]
        )
        self.assertEqual(fetcher.datasets, ["localidades", "departamentos"])
        results = fetcher.run()
        self.assertEqual(sorted(r["dataset"] for r in results), ["departamentos", "localidades"])
        self.assertEqual(mock_fetch.call_count, 2)

    @patch('georef_fetcher.datasets_fetcher.ensure_dir', side_effect=PermissionError("denegado"))
    def test_data_dir_failure_aborts(self, _):
        with self.assertRaises(OSError):
            GeorefFetcher(data_dir=self.dir).run()


class TestMain(unittest.TestCase):
    @patch('georef_fetcher.datasets_fetcher.setup_logging')
    @patch('georef_fetcher.datasets_fetcher.GeorefFetcher')
    def test_exit_zero_even_with_failed_jobs(self, mock_fetcher, _):
        mock_fetcher.return_value.run.return_value = [{"dataset": "municipios", "status": "failed"}]
        self.assertEqual(main(["--data-dir", "salida", "--max", "100"]), 0)
        mock_fetcher.assert_called_once_with(
            data_dir="salida", max_results=100, datasets=list(Settings.DATASETS)
        )

    @patch('georef_fetcher.datasets_fetcher.setup_logging')
    @patch('georef_fetcher.datasets_fetcher.GeorefFetcher')
    def test_exit_one_when_dir_cannot_be_created(self, mock_fetcher, _):
        mock_fetcher.return_value.run.side_effect = PermissionError("denegado")
        self.assertEqual(main([]), 1)

    @patch('georef_fetcher.datasets_fetcher.setup_logging')
    @patch('georef_fetcher.datasets_fetcher.GeorefFetcher')
    def test_keyboard_interrupt(self, mock_fetcher, _):
        mock_fetcher.return_value = MagicMock()
        mock_fetcher.return_value.run.side_effect = KeyboardInterrupt
        self.assertEqual(main(["--datasets", "localidades"]), 0)


if __name__ == "__main__":
    unittest.main()
