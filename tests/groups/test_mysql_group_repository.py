from src.tour_office.tour_office.groups.mysql_group_repository import MySQLGroupRepository


class RecordingCursor:
    def __init__(self, log):
        self.log = log
        self.rowcount = 1

    def execute(self, sql, params=None):
        self.log.append((" ".join(sql.split()), params))

    def close(self):
        pass


class RecordingConnection:
    def __init__(self, owner):
        self.owner = owner

    def cursor(self, dictionary=False):
        return RecordingCursor(self.owner.statements)

    def commit(self):
        self.owner.commits += 1

    def rollback(self):
        self.owner.rollbacks += 1

    def close(self):
        self.owner.closed += 1


class RecordingFactory:
    def __init__(self):
        self.statements = []
        self.commits = 0
        self.rollbacks = 0
        self.closed = 0

    def connect(self):
        return RecordingConnection(self)


def test_delete_cascade_removes_children_first_in_one_transaction():
    factory = RecordingFactory()

    assert MySQLGroupRepository(factory).delete_cascade(5) is True

    tables = [sql.split(" FROM ")[1].split()[0] for sql, _ in factory.statements]
    assert tables == ["payments", "participants", "rooms", "expenses", "tour_groups"]
    assert all(params == (5,) for _, params in factory.statements)
    assert (factory.commits, factory.rollbacks, factory.closed) == (1, 0, 1)
