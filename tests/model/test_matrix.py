import unittest

from netmatrix.model.matrix import CellValue, Matrix


class MatrixTest(unittest.TestCase):

    def test_get_missing_cell(self):
        matrix = Matrix(['a'], ['x', 'y'], {('a', 'x'): CellValue(12.0)})

        self.assertEqual(CellValue(12.0), matrix.get('a', 'x'))
        self.assertIsNone(matrix.get('a', 'y'))
        self.assertEqual([('a', [CellValue(12.0), None])], list(matrix.rows()))

    def test_is_empty(self):
        self.assertTrue(Matrix().is_empty())
        self.assertTrue(Matrix(['a'], []).is_empty())
        self.assertFalse(Matrix(['a'], ['b']).is_empty())
