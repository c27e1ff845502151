"""Customer / Policy service routers."""

from apogee.api.v1.customer import convert, group_policies, holders, individual_policies, policies, quotes

routers = [
    convert.router,
    policies.router,
    individual_policies.router,
    group_policies.router,
    holders.router,
    quotes.router,
]
