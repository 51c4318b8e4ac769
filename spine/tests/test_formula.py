"""Tests for the formula factory and formula nodes"""

from spine.formula import Assignment, FormulaFactory, FType
from spine.tests import TestCase, main
from spine.utils.exceptions import FormulaError, FormulaFactoryError


class TestFormulaFactory(TestCase):
    """Construction, simplification and interning"""

    def setUp(self):
        self.f = FormulaFactory()
        self.x, self.y, self.z = self.f.variables("x", "y", "z")

    def test_interning(self):
        f, x, y = self.f, self.x, self.y
        self.assertIs(f.and_(x, y), f.and_(x, y))
        self.assertIs(f.literal("x", False), f.literal("x", False))
        self.assertIs(f.not_(f.or_(x, y)), f.not_(f.or_(x, y)))

    def test_flattening_and_duplicates(self):
        f, x, y, z = self.f, self.x, self.y, self.z
        self.assertEqual(f.and_(f.and_(x, y), z).operands, (x, y, z))
        self.assertIs(f.or_(x, x), x)
        self.assertEqual(f.or_([x, y, x]).operands, (x, y))

    def test_constants_and_complements(self):
        f, x, y = self.f, self.x, self.y
        self.assertIs(f.and_(), f.verum())
        self.assertIs(f.or_(), f.falsum())
        self.assertIs(f.and_(x, f.verum()), x)
        self.assertIs(f.and_(x, f.falsum()), f.falsum())
        self.assertIs(f.or_(x, f.verum()), f.verum())
        self.assertIs(f.and_(x, y, x.negate()), f.falsum())
        self.assertIs(f.or_(x, x.negate()), f.verum())

    def test_binary_simplifications(self):
        f, x, y = self.f, self.x, self.y
        self.assertIs(f.implication(x, x), f.verum())
        self.assertIs(f.implication(f.verum(), y), y)
        self.assertIs(f.implication(x, f.falsum()), x.negate())
        self.assertIs(f.equivalence(x, x.negate()), f.falsum())
        self.assertIs(f.equivalence(f.falsum(), y), y.negate())
        self.assertEqual(f.equivalence(x, y).type, FType.EQUIV)

    def test_negation(self):
        f, x, y = self.f, self.x, self.y
        self.assertEqual(x.negate(), f.literal("x", False))
        self.assertIs(x.negate().negate(), x)
        conj = f.and_(x, y)
        self.assertIs(f.not_(f.not_(conj)), conj)
        self.assertIs(f.verum().negate(), f.falsum())

    def test_foreign_operands(self):
        other = FormulaFactory()
        with self.assertRaises(FormulaFactoryError):
            self.f.and_(self.x, other.variable("y"))
        with self.assertRaises(FormulaFactoryError):
            self.f.not_(other.and_(*other.variables("a", "b")))

    def test_factory_ids(self):
        other = FormulaFactory()
        self.assertNotEqual(self.f.factory_id, other.factory_id)
        self.assertEqual(self.x.factory_id, self.f.factory_id)
        self.assertEqual(other.name, f"ff{other.factory_id}")
        self.assertEqual(FormulaFactory("named").name, "named")


class TestFormula(TestCase):
    """Literals, variables, normal forms and evaluation"""

    def setUp(self):
        self.f = FormulaFactory()
        self.x, self.y, self.z = self.f.variables("x", "y", "z")

    def test_literal_order(self):
        x, y = self.x, self.y
        lits = [y.negate(), x.negate(), y, x]
        self.assertEqual(sorted(lits), [x, x.negate(), y, y.negate()])

    def test_equality_across_factories(self):
        other = FormulaFactory()
        self.assertEqual(other.variable("x"), self.x)
        self.assertEqual(hash(other.variable("x")), hash(self.x))
        self.assertNotEqual(other.literal("x", False), self.x)
        self.assertEqual(other.or_(*other.variables("x", "y")), self.f.or_(self.x, self.y))

    def test_literals_and_variables(self):
        f, x, y = self.f, self.x, self.y
        phi = f.and_(f.or_(x.negate(), y.negate()), x)
        self.assertEqual(list(phi.literals()), [x, x.negate(), y.negate()])
        self.assertEqual(list(phi.variables()), [x, y])

    def test_literals_returns_copy(self):
        phi = self.f.or_(self.x, self.y)
        lits = phi.literals()
        lits.clear()
        self.assertEqual(len(phi.literals()), 2)

    def test_nnf(self):
        f, x, y = self.f, self.x, self.y
        self.assertEqual(f.not_(f.and_(x, y)).nnf(), f.or_(x.negate(), y.negate()))
        self.assertEqual(f.implication(x, y).nnf(), f.or_(x.negate(), y))
        self.assertEqual(f.not_(f.implication(x, y)).nnf(), f.and_(x, y.negate()))

    def test_cnf(self):
        f, x, y, z = self.f, self.x, self.y, self.z
        phi = f.or_(f.and_(x, y), z)
        self.assertFalse(phi.is_cnf())
        self.assertEqual(phi.cnf(), f.and_(f.or_(x, z), f.or_(y, z)))
        self.assertTrue(phi.cnf().is_cnf())
        self.assertIs(phi.cnf(), phi.cnf())
        self.assertEqual(f.not_(f.or_(x, y)).cnf(), f.and_(x.negate(), y.negate()))

    def test_clauses(self):
        f, x, y, z = self.f, self.x, self.y, self.z
        phi = f.and_(f.or_(x, y), z)
        self.assertEqual(phi.clauses(), [[x, y], [z]])
        self.assertEqual(f.verum().clauses(), [])
        self.assertEqual(f.falsum().clauses(), [[]])
        with self.assertRaises(FormulaError):
            f.equivalence(x, y).clauses()

    def test_evaluate(self):
        f, x, y = self.f, self.x, self.y
        assignment = Assignment([x, y.negate()])
        self.assertTrue(f.and_(x, y.negate()).evaluate(assignment))
        self.assertFalse(f.implication(x, y).evaluate(assignment))
        self.assertTrue(f.equivalence(x.negate(), y).evaluate(assignment))
        # unassigned variables are false
        self.assertTrue(self.z.negate().evaluate(assignment))

    def test_to_string(self):
        f, x, y, z = self.f, self.x, self.y, self.z
        self.assertEqual(str(f.and_(f.or_(x, y.negate()), z)), "(x | ~y) & z")
        self.assertEqual(str(f.not_(f.and_(x, y))), "~(x & y)")
        self.assertEqual(str(f.implication(x, f.implication(y, z))), "x => (y => z)")
        self.assertEqual(str(f.verum()), "$true")


class TestAssignment(TestCase):
    """Assignments and blocking clauses"""

    def test_blocking_clause(self):
        f = FormulaFactory()
        x, y, z = f.variables("x", "y", "z")
        model = Assignment([x, y.negate(), z])
        self.assertEqual(model.blocking_clause(f), f.or_(x.negate(), y, z.negate()))
        self.assertEqual(model.blocking_clause(f, [x, y]), f.or_(x.negate(), y))
        self.assertFalse(f.or_(x.negate(), y, z.negate()).evaluate(model))

    def test_literals(self):
        f = FormulaFactory()
        x, y = f.variables("x", "y")
        model = Assignment([y.negate(), x])
        self.assertEqual(list(model.literals()), [x, y.negate()])
        self.assertIn(y.negate(), model)
        self.assertNotIn(y, model)
        self.assertEqual(len(model), 2)
        self.assertEqual(model, Assignment([x, y.negate()]))


if __name__ == "__main__":
    main()
