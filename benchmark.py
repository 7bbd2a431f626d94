from orm_practice import Member, EntityQuery, insert_member
from orm_practice.base.session import PersistenceUnit
from orm_practice.config import PersistenceProfile
import argparse
import time
import random
from faker import Faker


random.seed(42)
fake = Faker()
Faker.seed(42)

def generate_members(n):
    for _ in range(n):
        yield Member(
            fake.name(),
            fake.first_name(),
            random.randint(18, 90),
        )

def inserts(unit, count):
    names = []
    insert_start = time.time()
    with unit.unit_of_work() as uow:
        for member in generate_members(count):
            insert_member(uow.session, member)
            names.append(member.name)
    insert_duration = time.time() - insert_start
    print(f"Inserted {count} members in {insert_duration:.2f} seconds.")
    return insert_duration, names

def lookups(unit, names, count):
    queried = [random.choice(names) for _ in range(count)]

    query_start = time.time()
    with unit.unit_of_work() as uow:
        for name in queried:
            # Faker names can repeat, so only the first match is fetched
            EntityQuery(uow.session, Member).where_eq("name", name).fetch_first()
    query_duration = time.time() - query_start
    print(f"Executed {count} lookups by name in {query_duration:.2f} seconds.")
    return query_duration

def run_benchmark(url="sqlite://", count=10_000, lookup_count=500):
    print(f"Running benchmark: url={url}, count={count}")

    unit = PersistenceUnit(PersistenceProfile(name="benchmark", url=url))

    with unit:
        elapsed, names = inserts(unit, count)
        elapsed += lookups(unit, names, lookup_count)

    print(f"Total runtime for {url}: {elapsed:.2f} seconds.")


if __name__ == "__main__":
    parser = argparse.ArgumentParser()
    parser.add_argument("--url", default="sqlite://")
    parser.add_argument("--count", type=int, default=10_000)
    parser.add_argument("--lookups", type=int, default=500)
    args = parser.parse_args()
    run_benchmark(args.url, args.count, args.lookups)
