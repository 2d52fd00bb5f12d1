"""Source snippets shared across tests."""

SUM_SOURCE = "function sum(a,b){ return a+b; }"

FETCH_BODY = (
    "try { const r = await fetch(url); return await r.json(); } catch(e) { return null; }"
)

SHOP_SOURCE = """import React from 'react';
const axios = require("axios");

class Cart extends Base {
  constructor() { super(); }
}

function calcTotal(items) {
  let sum = 0;
  for (let i = 0; i < items.length; i++) {
    if (items[i].price > 0) { sum += items[i].price; }
  }
  return sum;
}

const fetchUser = async (id) => {
  const res = await axios.get(`/users/${id}`);
  return res.data;
};

const double = x => x * 2;
"""

SLOW_SOURCE = """const rows = document.querySelectorAll('.row');
for (let i = 0; i < rows.length; i++) {
  const label = `row ${i}`;
}
setInterval(poll, 1000);
const copy = JSON.parse(JSON.stringify(state));
"""

REPEATED_SOURCE = """total += price * quantity;
log(total);
reset();
total += price * quantity;
log(total);
"""
