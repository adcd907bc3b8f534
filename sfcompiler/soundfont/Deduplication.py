'''
### Deduplication Module

Codebook sharing between samples. Two samples whose codebooks have the same order, the same
predictor count and identical coefficients share one emitted book: the first sample (in
reading order) to carry that content owns the book symbol, every later one references it.

Classes:
    `BookDeduplicator`:
        Hands out the owning book name for each sample as samples are emitted in order.
'''

from ..Registry import Registry

def book_key(book) -> tuple:
  return (book.order, book.num_predictors, tuple(book.state))

class BookDeduplicator:
  ''' Tracks emitted books by content '''
  def __init__(self):
    self.registry = Registry()

  def resolve(self, sample) -> tuple[str, bool]:
    ''' Returns (book name, whether the book must be written) '''
    name = self.registry.declare(book_key(sample.book), sample.name)
    return name, name == sample.name

if __name__ == '__main__':
  pass
